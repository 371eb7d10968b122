import pytest

from controllers.import_processor import EnrutadorHojas, NormalizadorRegistros, TablaAlias
from database import models  # noqa: F401
from database.conexion import Base, crear_fabrica_sesiones, crear_motor
from services.semaforo import ClasificadorSemaforo, ConfiguracionUmbrales, TablaReglasSemaforo
from database.schemas import UmbralesGlobales


class FakeAlmacen:
    """Almacén en memoria que registra cada llamada y puede fallar a pedido."""

    def __init__(self, fallar_en_lote=None, fallar_eliminacion=False):
        self.registros = []
        self.llamadas = []
        self.fallar_en_lote = fallar_en_lote
        self.fallar_eliminacion = fallar_eliminacion
        self.umbrales = UmbralesGlobales(30, 90, version=1)

    def eliminar_todos(self):
        self.llamadas.append(("eliminar_todos", 0))
        if self.fallar_eliminacion:
            raise RuntimeError("sin conexión")
        self.registros.clear()

    def insertar_lote(self, registros):
        numero = sum(1 for nombre, _ in self.llamadas if nombre == "insertar_lote") + 1
        self.llamadas.append(("insertar_lote", len(registros)))
        if self.fallar_en_lote == numero:
            raise RuntimeError("payload rechazado")
        self.registros.extend(registros)
        return len(registros)

    def listar(self, categoria, filtro_abogado=None):
        return [r for r in self.registros if r["categoria"] == categoria]

    def obtener_umbrales(self):
        return self.umbrales

    def establecer_umbrales(self, verde_max, amarillo_max):
        self.umbrales = UmbralesGlobales(verde_max, amarillo_max, version=self.umbrales.version + 1)
        return self.umbrales


@pytest.fixture
def tabla_alias():
    return TablaAlias()


@pytest.fixture
def enrutador():
    return EnrutadorHojas()


@pytest.fixture
def normalizador(tabla_alias):
    return NormalizadorRegistros(tabla_alias)


@pytest.fixture
def umbrales():
    return ConfiguracionUmbrales()


@pytest.fixture
def clasificador(umbrales):
    return ClasificadorSemaforo(TablaReglasSemaforo.por_defecto(), umbrales)


@pytest.fixture
def almacen():
    return FakeAlmacen()


@pytest.fixture
def session_factory():
    engine = crear_motor("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield crear_fabrica_sesiones(engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def fabrica_almacen():
    return FakeAlmacen
