from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping

from config.mappings import CATEGORIAS
from config.semaforo import CAMPO_DIAS_DESPACHO
from database.schemas import Semaforo
from services.semaforo import ClasificadorSemaforo
from utilities.sanitizer import Sanitizer

ARCHIVADO = "archivado"

COLORES_EXCEL = {
    "VERDE": Semaforo.VERDE.value,
    "AMARILLO": Semaforo.AMARILLO.value,
    "ROJO": Semaforo.ROJO.value,
    "ARCHIVADO": ARCHIVADO,
}


def _conteo_semaforo() -> Dict[str, int]:
    return {nivel.value: 0 for nivel in Semaforo} | {ARCHIVADO: 0}


@dataclass
class EstadisticasTablero:
    """Datos consolidados para el tablero principal."""
    por_categoria: Dict[str, int] = field(default_factory=lambda: {c: 0 for c in CATEGORIAS})
    por_abogado: Dict[str, int] = field(default_factory=dict)
    semaforo: Dict[str, int] = field(default_factory=_conteo_semaforo)
    semaforo_por_campo: Dict[str, Dict[str, int]] = field(default_factory=dict)
    total: int = 0


def nivel_registro(registro: Mapping[str, Any], clasificador: ClasificadorSemaforo, umbrales=None) -> str:
    """Nivel general de un expediente para el tablero.

    Manda la columna COLOR del Excel cuando trae un nivel conocido; si no, se
    clasifican los días en despacho.
    """
    color = Sanitizer.limpiar_texto(registro.get("color"))
    if color in COLORES_EXCEL:
        return COLORES_EXCEL[color]
    return clasificador.clasificar(
        CAMPO_DIAS_DESPACHO, registro.get(CAMPO_DIAS_DESPACHO), registro.get("categoria"), umbrales
    ).value


def calcular_estadisticas(registros: Iterable[Mapping[str, Any]],
                          clasificador: ClasificadorSemaforo) -> EstadisticasTablero:
    """Agrega conteos por categoría, por abogado y por nivel de semáforo.

    Los umbrales globales se leen una sola vez para todo el cálculo.

    Args:
        registros (Iterable[Mapping]): Expedientes (RegistroCanonico o dicts).
        clasificador (ClasificadorSemaforo): Clasificador a usar.

    Returns:
        EstadisticasTablero: Conteos consolidados.
    """
    stats = EstadisticasTablero()
    umbrales = clasificador.fuente_umbrales.obtener_umbrales()
    nombres_abogado = {}

    for registro in registros:
        stats.total += 1
        categoria = registro.get("categoria")
        if categoria in stats.por_categoria:
            stats.por_categoria[categoria] += 1

        abogado = registro.get("abogado")
        clave = Sanitizer.limpiar_texto(abogado)
        if clave:
            # Se muestra la primera grafía encontrada de cada abogado
            nombre = nombres_abogado.setdefault(clave, str(abogado).strip())
            stats.por_abogado[nombre] = stats.por_abogado.get(nombre, 0) + 1

        stats.semaforo[nivel_registro(registro, clasificador, umbrales)] += 1

        for campo in clasificador.tabla_reglas.campos():
            if registro.get(campo) is None:
                continue
            nivel = clasificador.clasificar(campo, registro[campo], categoria, umbrales)
            conteo = stats.semaforo_por_campo.setdefault(campo, {n.value: 0 for n in Semaforo})
            conteo[nivel.value] += 1

    return stats
