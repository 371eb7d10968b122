import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from config.mappings import ALIAS_COLUMNAS, CAMPOS_ENTEROS, CAMPOS_IDENTIDAD, RUTAS_HOJAS
from database.schemas import EstadisticasHoja, RegistroCanonico
from utilities.sanitizer import Sanitizer

logger = logging.getLogger(__name__)

FilaCruda = Mapping[str, Any]
HojaCruda = Tuple[str, Sequence[FilaCruda]]


def _normalizar(texto: Any) -> str:
    return str(texto).strip().upper()


class ExcelEngine:
    """Motor de carga de libros de hoja de cálculo (Excel/ODS).

    Lee todas las hojas del archivo físico y las entrega como pares
    (nombre_hoja, filas), donde cada fila es un diccionario
    {encabezado_literal: valor_celda}. No interpreta el contenido: eso lo
    hacen el enrutador y el normalizador.
    """

    def __init__(self, filepath: str):
        """Inicializa el motor con la ruta del archivo.

        Args:
            filepath (str): Ruta al archivo .xlsx, .xls o .ods.
        """
        self.filepath = filepath
        self.hojas: Dict[str, pd.DataFrame] = {}
        self.ultimo_error: Optional[Exception] = None

    def cargar(self) -> bool:
        """Carga todas las hojas del archivo en DataFrames de pandas.

        Returns:
            bool: True si la carga fue exitosa, False en caso de error
            (el error queda en `ultimo_error`).
        """
        try:
            engine = "odf" if self.filepath.lower().endswith(".ods") else None
            self.hojas = pd.read_excel(self.filepath, sheet_name=None, engine=engine, dtype=object)
            return True
        except Exception as e:
            logger.error("No se pudo leer el archivo %s: %s", self.filepath, e)
            self.ultimo_error = e
            return False

    def libro(self) -> List[HojaCruda]:
        """Devuelve el libro cargado en el formato que consume el orquestador.

        Las columnas sin encabezado ("Unnamed: n") se descartan.

        Returns:
            List[Tuple[str, List[dict]]]: Hojas en el orden del archivo.
        """
        resultado = []
        for nombre, df in self.hojas.items():
            columnas = [c for c in df.columns if not str(c).startswith("Unnamed:")]
            filas = df[columnas].to_dict(orient="records") if columnas else []
            resultado.append((str(nombre), filas))
        return resultado


class TablaAlias:
    """Tabla ordenada de alias de encabezados -> campo canónico.

    La búsqueda recorta espacios, ignora mayúsculas y exige coincidencia
    exacta. Si dos alias normalizan al mismo texto, gana el primero declarado;
    si además apuntan a campos distintos se registra como colisión.
    """

    def __init__(self, alias: Iterable[Tuple[str, str]] = ALIAS_COLUMNAS):
        self.alias: Tuple[Tuple[str, str], ...] = tuple(alias)
        self._indice: Dict[str, str] = {}
        self._colisiones: List[Tuple[str, str, str]] = []

        for patron, campo in self.alias:
            clave = _normalizar(patron)
            previo = self._indice.get(clave)
            if previo is None:
                self._indice[clave] = campo
            elif previo != campo:
                self._colisiones.append((clave, previo, campo))
                logger.warning("Alias '%s' declarado para '%s' y '%s'; se usa '%s'",
                               clave, previo, campo, previo)

    def resolver(self, encabezado: Any) -> Optional[str]:
        """Traduce un encabezado de Excel a su campo canónico.

        Args:
            encabezado (Any): Texto literal del encabezado.

        Returns:
            str | None: Campo canónico o None si el encabezado no se reconoce.
        """
        if encabezado is None:
            return None
        return self._indice.get(_normalizar(encabezado))

    def colisiones(self) -> List[Tuple[str, str, str]]:
        """Lista de (alias, campo_usado, campo_ignorado) con alias ambiguos."""
        return list(self._colisiones)


class EnrutadorHojas:
    """Asigna a cada hoja del libro una categoría de expedientes.

    El nombre de la hoja se recorta y pasa a mayúsculas; gana el primer patrón
    (en orden de declaración) contenido en el nombre.
    """

    def __init__(self, rutas: Iterable[Tuple[str, str]] = RUTAS_HOJAS):
        self.rutas: Tuple[Tuple[str, str], ...] = tuple(rutas)
        for previo, posterior in self.enmascaramientos():
            logger.warning("El patrón de hoja '%s' (%s) oculta al patrón '%s' (%s)",
                           previo[0], previo[1], posterior[0], posterior[1])

    def enrutar(self, nombre_hoja: Any) -> Optional[str]:
        """Devuelve la categoría de la hoja o None si no se reconoce."""
        if nombre_hoja is None:
            return None
        nombre = _normalizar(nombre_hoja)
        for patron, categoria in self.rutas:
            if patron.upper() in nombre:
                return categoria
        return None

    def enmascaramientos(self) -> List[Tuple[Tuple[str, str], Tuple[str, str]]]:
        """Pares de rutas donde un patrón anterior impide que gane uno posterior.

        Ocurre cuando el patrón anterior está contenido en el posterior y
        apuntan a categorías distintas.
        """
        pares = []
        for i, previo in enumerate(self.rutas):
            for posterior in self.rutas[i + 1:]:
                if previo[1] != posterior[1] and previo[0].upper() in posterior[0].upper():
                    pares.append((previo, posterior))
        return pares


class NormalizadorRegistros:
    """Convierte filas crudas de una hoja en expedientes canónicos.

    Aplica la tabla de alias, convierte los tipos de cada campo y descarta las
    filas que no tienen ningún campo de identidad. Nunca lanza excepciones por
    celdas o filas mal formadas: el dato afectado simplemente se omite.
    """

    def __init__(self, tabla_alias: TablaAlias, campos_enteros: Iterable[str] = CAMPOS_ENTEROS,
                 campos_identidad: Iterable[str] = CAMPOS_IDENTIDAD):
        """
        Args:
            tabla_alias (TablaAlias): Alias de encabezados a usar.
            campos_enteros (Iterable[str]): Campos que se convierten a entero.
            campos_identidad (Iterable[str]): Campos que identifican un expediente.
        """
        self.tabla_alias = tabla_alias
        self.campos_enteros = frozenset(campos_enteros)
        self.campos_identidad = tuple(campos_identidad)

    def normalizar(self, filas: Optional[Sequence[FilaCruda]], categoria: str,
                   estadisticas: Optional[EstadisticasHoja] = None) -> List[RegistroCanonico]:
        """Normaliza todas las filas de una hoja.

        Args:
            filas (Sequence[dict]): Filas {encabezado: valor} de la hoja.
            categoria (str): Categoría asignada por el enrutador.
            estadisticas (EstadisticasHoja, optional): Acumulador de descartes.

        Returns:
            List[RegistroCanonico]: Registros válidos en el orden de la hoja.
        """
        registros = []
        if not filas:
            return registros

        for idx, fila in enumerate(filas):
            if not isinstance(fila, Mapping):
                if estadisticas:
                    estadisticas.filas_leidas += 1
                    estadisticas.filas_sin_identidad += 1
                    estadisticas.anotar(f"Fila {idx + 2}: formato no reconocido, se omite")
                continue

            campos = self._convertir_fila(fila, idx + 2, estadisticas)

            if estadisticas:
                estadisticas.filas_leidas += 1

            if not any(c in campos for c in self.campos_identidad):
                if estadisticas:
                    estadisticas.filas_sin_identidad += 1
                continue

            registros.append(RegistroCanonico(categoria=categoria, campos=campos))

        if estadisticas:
            estadisticas.registros += len(registros)
        return registros

    def _convertir_fila(self, fila: FilaCruda, numero_fila: int,
                        estadisticas: Optional[EstadisticasHoja]) -> Dict[str, Any]:
        campos: Dict[str, Any] = {}

        for encabezado, valor in fila.items():
            campo = self.tabla_alias.resolver(encabezado)
            if campo is None:
                if estadisticas and not Sanitizer.es_vacio(encabezado):
                    estadisticas.encabezados_no_resueltos.add(str(encabezado).strip())
                continue
            if Sanitizer.es_vacio(valor):
                continue

            if campo in self.campos_enteros:
                convertido = Sanitizer.a_entero(valor)
                if convertido is None:
                    if estadisticas:
                        estadisticas.celdas_invalidas += 1
                        estadisticas.anotar(
                            f"Fila {numero_fila}: '{encabezado}' = {valor!r} no es un entero, se omite")
                    continue
            else:
                convertido = Sanitizer.a_texto(valor)
                if convertido is None:
                    continue

            if campo in campos:
                # Dos columnas de la hoja con alias del mismo campo: se conserva la primera
                if estadisticas:
                    estadisticas.anotar(
                        f"Fila {numero_fila}: '{encabezado}' repite el campo '{campo}', se ignora")
                continue
            campos[campo] = convertido

        return campos
