from database.schemas import RegistroCanonico
from services.estadisticas import calcular_estadisticas, nivel_registro


def test_color_del_excel_tiene_prioridad(clasificador):
    registro = {"categoria": "inf_logos", "color": " verde ", "dias_despacho": 400}

    assert nivel_registro(registro, clasificador) == "verde"
    assert nivel_registro({"categoria": "archivados", "color": "Archivado"}, clasificador) == "archivado"


def test_sin_color_se_clasifican_los_dias(clasificador):
    assert nivel_registro({"categoria": "inf_logos", "dias_despacho": 95}, clasificador) == "rojo"
    assert nivel_registro({"categoria": "inf_logos", "color": "AZUL"}, clasificador) == "sin_clasificar"


def test_calcular_estadisticas(clasificador):
    registros = [
        RegistroCanonico("inf_logos", {"abogado": "Ana Gómez", "dias_despacho": 10, "en_terminos": "-3"}),
        RegistroCanonico("inf_logos", {"abogado": "ANA GOMEZ", "dias_despacho": 45}),
        RegistroCanonico("revocatorias", {"abogado": "Luis", "color": "ROJO"}),
        RegistroCanonico("archivados", {"tema": "x", "color": "ARCHIVADO"}),
    ]

    stats = calcular_estadisticas(registros, clasificador)

    assert stats.total == 4
    assert stats.por_categoria["inf_logos"] == 2
    assert stats.por_categoria["salvamentos"] == 0
    assert stats.por_abogado == {"Ana Gómez": 2, "Luis": 1}
    assert stats.semaforo == {
        "verde": 1, "amarillo": 1, "rojo": 1, "sin_clasificar": 0, "archivado": 1,
    }
    assert stats.semaforo_por_campo["en_terminos"]["verde"] == 1


def test_estadisticas_usan_una_sola_instantanea(clasificador, umbrales):
    llamadas = []
    original = umbrales.obtener_umbrales

    def contar():
        llamadas.append(1)
        return original()

    umbrales.obtener_umbrales = contar
    registros = [RegistroCanonico("inf_logos", {"tema": str(i), "dias_despacho": i + 1}) for i in range(10)]

    calcular_estadisticas(registros, clasificador)

    assert len(llamadas) == 1
