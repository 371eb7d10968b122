#  Copyright (c) 2026 Fleer
#  Permission is hereby granted, free of charge, to any person obtaining a copy
#  of this software and associated documentation files (the "Software"), to deal
#  in the Software without restriction, including without limitation the rights
#  to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
#  copies of the Software, and to permit persons to whom the Software is
#  furnished to do so, subject to the following conditions:
#
#  The above copyright notice and this permission notice shall be included in all
#  copies or substantial portions of the Software.

"""Motor de clasificación del semáforo de expedientes.

La tabla de reglas es inmutable y se construye una sola vez; los umbrales
globales son un valor versionado que el clasificador lee una vez por llamada.
"""

import json
import logging
import threading
from typing import Any, Dict, Iterable, Mapping, Optional, Protocol, Tuple

from config.semaforo import (
    ALCANCE_GENERAL, AMARILLO_MAX_DEFECTO, CAMPO_DIAS_DESPACHO, REGLAS_SEMAFORO, VERDE_MAX_DEFECTO
)
from database.schemas import RangoSemaforo, ReglaSemaforo, Semaforo, UmbralesGlobales
from utilities.sanitizer import Sanitizer

logger = logging.getLogger(__name__)


class FuenteUmbrales(Protocol):
    """Cualquier objeto capaz de entregar una instantánea de los umbrales globales."""

    def obtener_umbrales(self) -> UmbralesGlobales:
        ...


def construir_regla(campo, alcance, verde, amarillo, rojo_min) -> ReglaSemaforo:
    """Crea una ReglaSemaforo a partir de la forma tabular de `config.semaforo`."""
    return ReglaSemaforo(
        campo=campo,
        alcance=alcance,
        verde=RangoSemaforo(*verde),
        amarillo=RangoSemaforo(*amarillo) if amarillo is not None else None,
        rojo_min=rojo_min,
    )


class TablaReglasSemaforo:
    """Reglas de color por campo, con reglas específicas por categoría.

    Una regla de una categoría tiene prioridad sobre la regla 'general' del
    mismo campo.
    """

    def __init__(self, reglas: Iterable[ReglaSemaforo]):
        self._reglas: Dict[Tuple[str, str], ReglaSemaforo] = {}
        for regla in reglas:
            clave = (regla.campo, regla.alcance)
            if clave in self._reglas:
                raise ValueError(f"Regla duplicada para el campo '{regla.campo}' ({regla.alcance})")
            self._reglas[clave] = regla

    @classmethod
    def por_defecto(cls) -> "TablaReglasSemaforo":
        return cls(construir_regla(*fila) for fila in REGLAS_SEMAFORO)

    def buscar(self, campo: str, categoria: Optional[str]) -> Optional[ReglaSemaforo]:
        """Devuelve la regla aplicable o None si el campo no tiene regla."""
        if categoria:
            regla = self._reglas.get((campo, categoria))
            if regla is not None:
                return regla
        return self._reglas.get((campo, ALCANCE_GENERAL))

    def campos(self) -> Tuple[str, ...]:
        """Campos que tienen al menos una regla, en orden de declaración."""
        return tuple(dict.fromkeys(campo for campo, _ in self._reglas))

    def __len__(self):
        return len(self._reglas)


def cargar_reglas_json(ruta: str) -> TablaReglasSemaforo:
    """Carga una tabla de reglas alternativa desde un archivo JSON.

    Formato::

        {"reglas": [{"campo": "en_terminos", "alcance": "general",
                     "verde": [-15, 1], "amarillo": null, "rojo_min": 2}]}

    Args:
        ruta (str): Ruta al archivo JSON.

    Returns:
        TablaReglasSemaforo: Tabla construida con las reglas del archivo.

    Raises:
        ValueError: Si el archivo no tiene la estructura esperada.
    """
    with open(ruta, encoding="utf-8") as f:
        datos = json.load(f)

    try:
        reglas = [
            construir_regla(
                r["campo"],
                r.get("alcance", ALCANCE_GENERAL),
                _leer_rango(r["verde"], "verde"),
                _leer_rango(r["amarillo"], "amarillo") if r.get("amarillo") is not None else None,
                _leer_entero(r["rojo_min"], "rojo_min"),
            )
            for r in datos["reglas"]
        ]
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Archivo de reglas inválido '{ruta}': {e}") from e

    return TablaReglasSemaforo(reglas)


def _leer_entero(valor, nombre: str) -> int:
    if isinstance(valor, bool) or not isinstance(valor, int):
        raise ValueError(f"'{nombre}' debe ser un entero, se recibió {valor!r}")
    return valor


def _leer_rango(valor, nombre: str) -> Tuple[int, int]:
    if not isinstance(valor, (list, tuple)) or len(valor) != 2:
        raise ValueError(f"'{nombre}' debe ser una lista [minimo, maximo], se recibió {valor!r}")
    return _leer_entero(valor[0], nombre), _leer_entero(valor[1], nombre)


class ConfiguracionUmbrales:
    """Umbrales globales en memoria, versionados y seguros entre hilos.

    Cada actualización válida reemplaza la instantánea completa e incrementa
    la versión; una actualización inválida no modifica nada.
    """

    def __init__(self, verde_max: int = VERDE_MAX_DEFECTO, amarillo_max: int = AMARILLO_MAX_DEFECTO):
        self._lock = threading.Lock()
        self._actual = UmbralesGlobales(verde_max, amarillo_max, version=1)

    def obtener_umbrales(self) -> UmbralesGlobales:
        return self._actual

    def establecer_umbrales(self, verde_max: int, amarillo_max: int) -> UmbralesGlobales:
        """Aplica nuevos umbrales.

        Raises:
            ConfiguracionInvalidaError: Si verde_max >= amarillo_max o están fuera de rango.
        """
        with self._lock:
            nuevo = UmbralesGlobales(verde_max, amarillo_max, version=self._actual.version + 1)
            self._actual = nuevo
        logger.info("Umbrales del semáforo actualizados a %s/%s (v%s)",
                    nuevo.verde_max, nuevo.amarillo_max, nuevo.version)
        return nuevo


class ClasificadorSemaforo:
    """Asigna un nivel de semáforo a un conteo de días.

    Es una función pura de (campo, valor, categoría) y del estado actual de
    reglas y umbrales: no recuerda llamadas previas.
    """

    def __init__(self, tabla_reglas: TablaReglasSemaforo, fuente_umbrales: FuenteUmbrales,
                 campo_umbral_global: str = CAMPO_DIAS_DESPACHO):
        """
        Args:
            tabla_reglas (TablaReglasSemaforo): Reglas por campo.
            fuente_umbrales (FuenteUmbrales): Origen de los umbrales globales.
            campo_umbral_global (str): Campo que usa los umbrales globales.
        """
        self.tabla_reglas = tabla_reglas
        self.fuente_umbrales = fuente_umbrales
        self.campo_umbral_global = campo_umbral_global

    def clasificar(self, campo: str, valor: Any, categoria: Optional[str],
                   umbrales: Optional[UmbralesGlobales] = None) -> Semaforo:
        """Clasifica un valor.

        Args:
            campo (str): Campo canónico (ej. 'en_terminos').
            valor (Any): Valor numérico o texto numérico de la celda.
            categoria (str): Categoría del expediente o 'general'.
            umbrales (UmbralesGlobales, optional): Instantánea a usar; si se
                omite se lee una de la fuente.

        Returns:
            Semaforo: VERDE, AMARILLO, ROJO o SIN_CLASIFICAR.
        """
        numero = Sanitizer.a_numero(valor)
        if numero is None or numero == 0:
            return Semaforo.SIN_CLASIFICAR

        regla = self.tabla_reglas.buscar(campo, categoria)
        if regla is not None:
            return regla.evaluar(numero)

        if campo == self.campo_umbral_global:
            if umbrales is None:
                umbrales = self.fuente_umbrales.obtener_umbrales()
            return umbrales.evaluar(numero)

        return Semaforo.SIN_CLASIFICAR

    def clasificar_registro(self, registro: Mapping[str, Any]) -> Dict[str, Semaforo]:
        """Clasifica todos los campos con regla presentes en un expediente.

        Los umbrales se leen una sola vez para todo el registro.

        Returns:
            Dict[str, Semaforo]: {campo: nivel} solo para campos presentes.
        """
        categoria = registro.get("categoria")
        umbrales = self.fuente_umbrales.obtener_umbrales()
        campos = self.tabla_reglas.campos() + (self.campo_umbral_global,)

        resultado = {}
        for campo in dict.fromkeys(campos):
            if registro.get(campo) is None:
                continue
            resultado[campo] = self.clasificar(campo, registro[campo], categoria, umbrales)
        return resultado
