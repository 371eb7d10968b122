import logging

import pytest

from services.importacion import OrquestadorImportacion
from utilities.errores import ErrorPersistencia


def _filas(n, prefijo="T"):
    return [{"TEMA": f"{prefijo}{i}", "DIAS EN DESPACHO": i} for i in range(n)]


@pytest.fixture
def crear(enrutador, normalizador):
    def _crear(almacen, **kwargs):
        return OrquestadorImportacion(enrutador, normalizador, almacen, **kwargs)
    return _crear


def test_importacion_basica(crear, almacen):
    libro = [
        ("INF LOGOS", _filas(3)),
        ("REVOCATORIAS", _filas(2)),
        ("Hoja1", _filas(4)),
    ]

    resumen = crear(almacen).importar(libro)

    assert resumen.conteos["inf_logos"] == 3
    assert resumen.conteos["revocatorias"] == 2
    assert resumen.total == 5
    assert resumen.registros_confirmados == 5
    assert resumen.hojas_no_reconocidas == ["Hoja1"]
    assert len(almacen.registros) == 5
    assert resumen.mensaje() == "Se importaron 5 de 5 registros en 2 hojas."


def test_hoja_no_reconocida_genera_advertencia(crear, almacen, caplog):
    with caplog.at_level(logging.WARNING, logger="services.importacion"):
        crear(almacen).importar([("INF LOGOS", _filas(1)), ("Hoja1", _filas(1))])

    avisos = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert any("Hoja1" in r.getMessage() for r in avisos)


def test_almacen_que_informa_menos_registros(crear, almacen):
    almacen.insertar_lote = lambda lote: len(lote) - 1

    resumen = crear(almacen, tamano_lote=2).importar([("INF LOGOS", _filas(3))])

    assert resumen.total == 3
    assert resumen.registros_confirmados == 1


def test_lotes_de_doscientos(crear, almacen):
    resumen = crear(almacen).importar([("INF ORDINARIOS", _filas(450))])

    assert almacen.llamadas == [("insertar_lote", 200), ("insertar_lote", 200), ("insertar_lote", 50)]
    assert resumen.registros_confirmados == 450


def test_tamano_de_lote_fuera_de_rango(crear, almacen):
    with pytest.raises(ValueError):
        crear(almacen, tamano_lote=201)
    with pytest.raises(ValueError):
        crear(almacen, tamano_lote=0)


def test_falla_en_lote_informa_confirmados(crear, fabrica_almacen):
    almacen = fabrica_almacen(fallar_en_lote=3)

    with pytest.raises(ErrorPersistencia) as info:
        crear(almacen, tamano_lote=100).importar([("INF LOGOS", _filas(450))])

    error = info.value
    assert error.registros_confirmados == 200
    assert error.lote_fallido == 3
    assert error.total_lotes == 5
    assert len(almacen.registros) == 200
    assert isinstance(error.__cause__, RuntimeError)


def test_reemplazo_borra_antes_de_insertar(crear, almacen):
    crear(almacen).importar([("INF LOGOS", _filas(3, "viejo"))])
    almacen.llamadas.clear()

    crear(almacen).importar([("INF LOGOS", _filas(2, "nuevo"))], reemplazar_todo=True)

    assert almacen.llamadas[0] == ("eliminar_todos", 0)
    assert [r["tema"] for r in almacen.registros] == ["nuevo0", "nuevo1"]


def test_reemplazo_es_idempotente(crear, almacen):
    libro = [("INF LOGOS", _filas(3)), ("ARCHIVADOS", _filas(2))]

    crear(almacen).importar(libro, reemplazar_todo=True)
    primera = [dict(r) for r in almacen.registros]
    crear(almacen).importar(libro, reemplazar_todo=True)

    assert [dict(r) for r in almacen.registros] == primera


def test_falla_al_vaciar(crear, fabrica_almacen):
    almacen = fabrica_almacen(fallar_eliminacion=True)

    with pytest.raises(ErrorPersistencia) as info:
        crear(almacen).importar([("INF LOGOS", _filas(3))], reemplazar_todo=True)

    assert info.value.lote_fallido is None
    assert info.value.registros_confirmados == 0
    assert info.value.eliminacion_realizada is False
    assert almacen.llamadas == [("eliminar_todos", 0)]


def test_sin_hojas_reconocidas_no_toca_el_almacen(crear, almacen):
    resumen = crear(almacen).importar([("Hoja1", _filas(3)), ("Resumen", _filas(1))], reemplazar_todo=True)

    assert resumen.sin_hojas_reconocidas
    assert resumen.total == 0
    assert almacen.llamadas == []
    assert resumen.mensaje().startswith("No se encontraron hojas reconocidas")


def test_hojas_reconocidas_sin_registros(crear, almacen):
    resumen = crear(almacen).importar([("INF LOGOS", [{"ESTADO": "Pausa"}])], reemplazar_todo=True)

    assert not resumen.sin_hojas_reconocidas
    assert resumen.total == 0
    assert resumen.filas_sin_identidad == 1
    assert almacen.llamadas == []
    assert "no contienen registros válidos" in resumen.mensaje()


def test_varias_hojas_misma_categoria_se_acumulan(crear, almacen):
    resumen = crear(almacen).importar([("SALVAMENTOS", _filas(2)), ("ACLARACIONES", _filas(3))])

    assert resumen.conteos["salvamentos"] == 5
    assert resumen.hojas_reconocidas == [("SALVAMENTOS", "salvamentos"), ("ACLARACIONES", "salvamentos")]


def test_diagnosticos_opcionales(crear, fabrica_almacen):
    libro = [("INF LOGOS", [{"TEMA": "x", "DIAS EN DESPACHO": "muchos"}]), ("Otra", [])]

    sin = crear(fabrica_almacen()).importar(libro)
    con = crear(fabrica_almacen(), registrar_diagnosticos=True).importar(libro)

    assert sin.diagnosticos is None
    assert sin.celdas_invalidas == con.celdas_invalidas == 1
    assert any("no es un entero" in d for d in con.diagnosticos)
    assert any("hoja no reconocida" in d for d in con.diagnosticos)
