from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Optional, Tuple

from config.mappings import CATEGORIAS, NOMBRES_CATEGORIAS
from config.semaforo import LIMITE_AMARILLO, LIMITE_VERDE
from utilities.errores import ConfiguracionInvalidaError


class Semaforo(str, Enum):
    """Nivel del semáforo asignado a un conteo de días."""
    VERDE = "verde"
    AMARILLO = "amarillo"
    ROJO = "rojo"
    SIN_CLASIFICAR = "sin_clasificar"


@dataclass(frozen=True, eq=False)
class RegistroCanonico(Mapping):
    """
    Expediente normalizado a partir de una fila de Excel.

    Se comporta como un diccionario de solo lectura {campo_canónico: valor};
    la clave 'categoria' siempre está presente. Los campos ausentes en la fila
    simplemente no aparecen.
    """
    categoria: str
    campos: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.categoria not in CATEGORIAS:
            raise ValueError(f"Categoría desconocida: '{self.categoria}'")
        # Copia congelada para que nadie mute el registro tras crearlo
        object.__setattr__(self, "campos", MappingProxyType(dict(self.campos)))

    def __getitem__(self, clave):
        if clave == "categoria":
            return self.categoria
        return self.campos[clave]

    def __iter__(self):
        yield "categoria"
        yield from self.campos

    def __len__(self):
        return len(self.campos) + 1

    def a_dict(self) -> Dict[str, Any]:
        """Devuelve una copia mutable lista para la capa de persistencia."""
        return {"categoria": self.categoria, **self.campos}


@dataclass
class EstadisticasHoja:
    """Contadores de lo que el normalizador descartó en una hoja."""
    hoja: str
    categoria: str
    filas_leidas: int = 0
    registros: int = 0
    filas_sin_identidad: int = 0
    celdas_invalidas: int = 0
    encabezados_no_resueltos: set = field(default_factory=set)
    diagnosticos: Optional[List[str]] = None

    def anotar(self, mensaje: str):
        if self.diagnosticos is not None:
            self.diagnosticos.append(f"[{self.hoja}] {mensaje}")


@dataclass
class ResumenImportacion:
    """Resumen final de una importación masiva de expedientes."""
    conteos: Dict[str, int] = field(default_factory=lambda: {c: 0 for c in CATEGORIAS})
    hojas_reconocidas: List[Tuple[str, str]] = field(default_factory=list)  # (hoja, categoria)
    hojas_no_reconocidas: List[str] = field(default_factory=list)
    encabezados_no_resueltos: int = 0
    celdas_invalidas: int = 0
    filas_sin_identidad: int = 0
    reemplazo_total: bool = False
    registros_confirmados: int = 0
    diagnosticos: Optional[List[str]] = None

    @property
    def total(self) -> int:
        return sum(self.conteos.values())

    @property
    def sin_hojas_reconocidas(self) -> bool:
        """True si ninguna hoja del libro coincidió con una categoría."""
        return not self.hojas_reconocidas

    def agregar_hoja(self, estadisticas: EstadisticasHoja):
        self.hojas_reconocidas.append((estadisticas.hoja, estadisticas.categoria))
        self.conteos[estadisticas.categoria] += estadisticas.registros
        self.encabezados_no_resueltos += len(estadisticas.encabezados_no_resueltos)
        self.celdas_invalidas += estadisticas.celdas_invalidas
        self.filas_sin_identidad += estadisticas.filas_sin_identidad

    def mensaje(self) -> str:
        """Texto para el usuario final; distingue 'sin hojas' de 'sin registros'."""
        if self.sin_hojas_reconocidas:
            esperadas = ", ".join(NOMBRES_CATEGORIAS.values())
            return ("No se encontraron hojas reconocidas en el archivo. "
                    f"Las hojas deben corresponder a: {esperadas}.")
        hojas = len(self.hojas_reconocidas)
        if self.total == 0:
            return f"Se reconocieron {hojas} hojas pero no contienen registros válidos."
        return f"Se importaron {self.registros_confirmados} de {self.total} registros en {hojas} hojas."


@dataclass(frozen=True)
class RangoSemaforo:
    """Rango inclusivo [minimo, maximo]."""
    minimo: int
    maximo: int

    def __post_init__(self):
        if self.minimo > self.maximo:
            raise ValueError(f"Rango inválido: {self.minimo} > {self.maximo}")

    def contiene(self, valor: float) -> bool:
        return self.minimo <= valor <= self.maximo


@dataclass(frozen=True)
class ReglaSemaforo:
    """Regla de colores de un campo, global ('general') o para una categoría."""
    campo: str
    alcance: str
    verde: RangoSemaforo
    rojo_min: int
    amarillo: Optional[RangoSemaforo] = None

    def evaluar(self, valor: float) -> Semaforo:
        if self.verde.contiene(valor):
            return Semaforo.VERDE
        if self.amarillo is not None and self.amarillo.contiene(valor):
            return Semaforo.AMARILLO
        if valor >= self.rojo_min:
            return Semaforo.ROJO
        return Semaforo.SIN_CLASIFICAR


@dataclass(frozen=True)
class UmbralesGlobales:
    """
    Umbrales del semáforo de días en despacho.

    verde <= verde_max < amarillo <= amarillo_max < rojo. La instancia se
    valida al construirse, así que nunca existe una configuración inválida.
    """
    verde_max: int
    amarillo_max: int
    version: int = 0

    def __post_init__(self):
        for nombre, valor, (minimo, maximo) in (
            ("verde_max", self.verde_max, LIMITE_VERDE),
            ("amarillo_max", self.amarillo_max, LIMITE_AMARILLO),
        ):
            if isinstance(valor, bool) or not isinstance(valor, int):
                raise ConfiguracionInvalidaError(f"{nombre} debe ser un entero, se recibió {valor!r}")
            if not minimo <= valor <= maximo:
                raise ConfiguracionInvalidaError(f"{nombre} debe estar entre {minimo} y {maximo}")
        if self.verde_max >= self.amarillo_max:
            raise ConfiguracionInvalidaError("El límite verde debe ser menor que el límite amarillo")

    def evaluar(self, valor: float) -> Semaforo:
        if valor <= self.verde_max:
            return Semaforo.VERDE
        if valor <= self.amarillo_max:
            return Semaforo.AMARILLO
        return Semaforo.ROJO
