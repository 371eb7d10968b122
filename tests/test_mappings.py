import logging

import pytest

from config.mappings import ALIAS_COLUMNAS, CATEGORIAS, RUTAS_HOJAS
from controllers.import_processor import EnrutadorHojas, TablaAlias


@pytest.mark.parametrize("encabezado", ["ABOGADO", " abogado ", "Abogado", "aBoGaDo\t"])
def test_resolver_ignora_espacios_y_mayusculas(tabla_alias, encabezado):
    assert tabla_alias.resolver(encabezado) == "abogado"


def test_resolver_marcas_de_una_letra(tabla_alias):
    assert tabla_alias.resolver("P") == "etapa_pr"
    assert tabla_alias.resolver("PR") == "etapa_pr"
    assert tabla_alias.resolver("R") == "etapa_rc"


def test_resolver_variantes_historicas(tabla_alias):
    assert tabla_alias.resolver("No. RADICADO CNE") == "radicado_cne"
    assert tabla_alias.resolver("EXPEDIENTE") == "radicado_cne"
    assert tabla_alias.resolver("DÍAS EN DESPACHO") == "dias_despacho"
    assert tabla_alias.resolver("# DE VECES QUE SE A DEVUELTO") == "devuelto"
    assert tabla_alias.resolver("Sémaforo/Dias en despacho") == "semaforo_dias"
    assert tabla_alias.resolver("Año") == "anio"


def test_resolver_encabezado_desconocido(tabla_alias):
    assert tabla_alias.resolver("COLUMNA NUEVA") is None
    assert tabla_alias.resolver("") is None
    assert tabla_alias.resolver(None) is None


def test_resolver_requiere_coincidencia_exacta(tabla_alias):
    assert tabla_alias.resolver("ABOGADO ASIGNADO") is None


def test_tabla_por_defecto_sin_colisiones(tabla_alias):
    assert tabla_alias.colisiones() == []
    assert len(tabla_alias.alias) == len(ALIAS_COLUMNAS)


def test_colision_gana_el_primero_declarado():
    tabla = TablaAlias([("Tema", "tema"), ("TEMA ", "sujeto"), ("tema", "tema")])

    assert tabla.resolver("tema") == "tema"
    assert tabla.colisiones() == [("TEMA", "tema", "sujeto")]


@pytest.mark.parametrize("hoja, categoria", [
    ("PROCESOS Y PRACTICAS", "procesos_practicas"),
    ("  procesos y prácticas 2025 ", "procesos_practicas"),
    ("INF LOGOS", "inf_logos"),
    ("Revocatorias", "revocatorias"),
    ("INF ORDINARIOS", "inf_ordinarios"),
    ("SALVAMENTOS Y ACLARACIONES PENDIENTES", "salvamentos"),
    ("Aclaraciones", "salvamentos"),
    ("ARCHIVADOS", "archivados"),
    ("ARCHIVADOS 2024", "archivados"),
])
def test_enrutar_hojas_conocidas(enrutador, hoja, categoria):
    assert enrutador.enrutar(hoja) == categoria


def test_enrutar_hoja_desconocida(enrutador):
    assert enrutador.enrutar("Hoja1") is None
    assert enrutador.enrutar("") is None
    assert enrutador.enrutar(None) is None


def test_enrutar_es_determinista(enrutador):
    resultados = {enrutador.enrutar("SALVAMENTOS Y ACLARACIONES P") for _ in range(5)}
    assert resultados == {"salvamentos"}


def test_rutas_por_defecto_cubren_todas_las_categorias(enrutador):
    assert {categoria for _, categoria in RUTAS_HOJAS} == set(CATEGORIAS)
    assert enrutador.enmascaramientos() == []


def test_primer_patron_declarado_gana():
    ambiguo = EnrutadorHojas([("INF", "inf_logos"), ("INF ORDINARIOS", "inf_ordinarios")])
    ordenado = EnrutadorHojas([("INF ORDINARIOS", "inf_ordinarios"), ("INF", "inf_logos")])

    assert ambiguo.enrutar("INF ORDINARIOS") == "inf_logos"
    assert ordenado.enrutar("INF ORDINARIOS") == "inf_ordinarios"
    assert ordenado.enrutar("INF LOGOS") == "inf_logos"


def test_enmascaramientos_detecta_patron_oculto():
    enrutador = EnrutadorHojas([("INF", "inf_logos"), ("INF ORDINARIOS", "inf_ordinarios")])

    assert enrutador.enmascaramientos() == [
        (("INF", "inf_logos"), ("INF ORDINARIOS", "inf_ordinarios")),
    ]


def test_patron_con_espacio_final_no_se_recorta():
    enrutador = EnrutadorHojas([("ARCHIVADOS ", "archivados")])

    assert enrutador.enrutar("ARCHIVADOS 2024") == "archivados"
    assert enrutador.enrutar("  ARCHIVADOS  ") is None


@pytest.mark.parametrize("patron, campo", ALIAS_COLUMNAS)
def test_todos_los_alias_ignoran_espacios_y_mayusculas(tabla_alias, patron, campo):
    assert tabla_alias.resolver(f"  {patron.lower()} ") == campo
    assert tabla_alias.resolver(patron.upper()) == campo


@pytest.mark.parametrize("rutas", [
    [("ARCHIVADOS", "archivados"), ("ARCHIVADOS ", "archivados")],
    [("ARCHIVADOS ", "archivados"), ("ARCHIVADOS", "archivados")],
])
def test_archivados_en_cualquier_orden(rutas):
    enrutador = EnrutadorHojas(rutas)

    assert enrutador.enrutar("ARCHIVADOS") == "archivados"
    assert enrutador.enrutar("ARCHIVADOS 2023") == "archivados"
    assert enrutador.enmascaramientos() == []


def test_colision_de_alias_genera_advertencia(caplog):
    with caplog.at_level(logging.WARNING, logger="controllers.import_processor"):
        TablaAlias([("TEMA", "tema"), ("tema ", "sujeto")])

    avisos = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert len(avisos) == 1
    assert "TEMA" in avisos[0] and "sujeto" in avisos[0]


def test_alias_repetido_al_mismo_campo_no_advierte(caplog):
    with caplog.at_level(logging.WARNING, logger="controllers.import_processor"):
        TablaAlias([("TEMA", "tema"), ("Tema", "tema")])

    assert not [r for r in caplog.records if r.levelno == logging.WARNING]


def test_patron_oculto_genera_advertencia(caplog):
    with caplog.at_level(logging.WARNING, logger="controllers.import_processor"):
        EnrutadorHojas([("INF", "inf_logos"), ("INF ORDINARIOS", "inf_ordinarios")])

    avisos = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert len(avisos) == 1
    assert "INF ORDINARIOS" in avisos[0]
