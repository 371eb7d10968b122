import pytest
from sqlalchemy.exc import SQLAlchemyError

from database.schemas import RegistroCanonico
from database.setup import inicializar_base_de_datos
from models.expediente_model import ExpedienteModel
from models.semaforo_config_model import SemaforoConfigModel
from services.importacion import OrquestadorImportacion
from services.persistence import PersistenceService
from utilities.errores import ConfiguracionInvalidaError


@pytest.fixture
def servicio(session_factory):
    return PersistenceService(session_factory)


def _registro(categoria="inf_logos", **campos):
    return RegistroCanonico(categoria, campos)


def test_insertar_y_listar(servicio):
    insertados = servicio.insertar_lote([
        _registro(abogado="Ana Gómez", tema="Logo A", dias_despacho=12, en_terminos="-3"),
        _registro(abogado="Luis Díaz", tema="Logo B"),
        _registro("revocatorias", abogado="Ana Gómez", tema="Revocatoria"),
    ])

    listados = servicio.listar("inf_logos")

    assert insertados == 3
    assert {r["tema"] for r in listados} == {"Logo A", "Logo B"}
    logo_a = next(r for r in listados if r["tema"] == "Logo A")
    assert dict(logo_a) == {
        "categoria": "inf_logos", "abogado": "Ana Gómez", "tema": "Logo A",
        "dias_despacho": 12, "en_terminos": "-3",
    }


def test_listar_filtra_por_abogado(servicio):
    servicio.insertar_lote([
        _registro(abogado="Ana Gómez", tema="1"),
        _registro(abogado="Luis Díaz", tema="2"),
    ])

    assert [r["tema"] for r in servicio.listar("inf_logos", "luis")] == ["2"]
    assert servicio.listar("archivados") == []


def test_eliminar_todos(servicio, session_factory):
    servicio.insertar_lote([_registro(tema="x"), _registro("archivados", tema="y")])

    servicio.eliminar_todos()

    assert ExpedienteModel(session_factory).count() == 0


def test_lote_vacio(servicio):
    assert servicio.insertar_lote([]) == 0


def test_umbrales_por_defecto_sin_fila(servicio):
    umbrales = servicio.obtener_umbrales()

    assert (umbrales.verde_max, umbrales.amarillo_max, umbrales.version) == (30, 90, 0)


def test_establecer_umbrales_incrementa_version(servicio):
    primero = servicio.establecer_umbrales(20, 60)
    segundo = servicio.establecer_umbrales(25, 70)

    assert (primero.version, segundo.version) == (1, 2)
    vigente = servicio.obtener_umbrales()
    assert (vigente.verde_max, vigente.amarillo_max, vigente.version) == (25, 70, 2)


def test_umbrales_invalidos_no_se_guardan(servicio):
    servicio.establecer_umbrales(20, 60)

    with pytest.raises(ConfiguracionInvalidaError):
        servicio.establecer_umbrales(60, 20)

    vigente = servicio.obtener_umbrales()
    assert (vigente.verde_max, vigente.amarillo_max, vigente.version) == (20, 60, 1)


def test_inicializar_base_de_datos_siembra_umbrales(session_factory):
    engine = session_factory.kw["bind"]

    assert inicializar_base_de_datos(engine, session_factory) is True
    assert inicializar_base_de_datos(engine, session_factory) is True

    modelo = SemaforoConfigModel(session_factory)
    assert modelo.count() == 1
    assert modelo.obtener_umbrales().version == 1


def test_importacion_completa_sobre_sqlite(servicio, enrutador, normalizador):
    libro = [
        ("INF ORDINARIOS", [{"ABOGADO": "Ana", "TEMA": f"T{i}", "DIAS EN DESPACHO": i} for i in range(250)]),
        ("ARCHIVADOS 2024", [{"EXPEDIENTE": "CNE-1", "FECHA DE ARCHIVO": 45875}]),
    ]
    orquestador = OrquestadorImportacion(enrutador, normalizador, servicio)

    orquestador.importar(libro)
    resumen = orquestador.importar(libro, reemplazar_todo=True)

    assert resumen.registros_confirmados == 251
    assert len(servicio.listar("inf_ordinarios")) == 250
    archivado = servicio.listar("archivados")[0]
    assert archivado["radicado_cne"] == "CNE-1"
    assert archivado["fecha_archivo"] == "45875"


def test_crud_generico(session_factory):
    modelo = ExpedienteModel(session_factory)

    creado = modelo.create({"categoria": "revocatorias", "tema": "Original"})
    assert len(creado.id) == 26
    assert creado.creado_en is not None

    actualizado = modelo.update(creado.id, {"tema": "Cambiado", "no_existe": 1})
    assert actualizado.tema == "Cambiado"
    assert modelo.get_by_id(creado.id).tema == "Cambiado"
    assert len(modelo.get_all()) == 1

    assert modelo.delete(creado.id) is True
    assert modelo.delete(creado.id) is False
    assert modelo.update(creado.id, {"tema": "x"}) is None
    assert modelo.get_by_id(creado.id) is None


def test_lote_rechazado_no_guarda_nada(session_factory):
    modelo = ExpedienteModel(session_factory)

    with pytest.raises(SQLAlchemyError):
        modelo.bulk_create([
            {"categoria": "inf_logos", "tema": "bien"},
            {"categoria": None, "tema": "sin categoría"},
        ])

    assert modelo.count() == 0
