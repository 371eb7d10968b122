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
import math
import unicodedata
from datetime import date, datetime
from typing import Any, Optional

import pandas as pd


class Sanitizer:
    """Clase utilitaria estática para limpieza y conversión de celdas de Excel."""

    @staticmethod
    def es_vacio(valor: Any) -> bool:
        """
        Indica si una celda debe tratarse como vacía.

        Args:
            valor (Any): Valor crudo de la celda (None, NaN, NaT, texto...).

        Returns:
            bool: True para None, NaN/NaT y textos en blanco.
        """
        if valor is None:
            return True
        if isinstance(valor, str):
            return valor.strip() == ""
        try:
            return bool(pd.isna(valor))
        except (TypeError, ValueError):
            # Listas u objetos compuestos: pd.isna devuelve un arreglo
            return False

    @staticmethod
    def limpiar_texto(texto: Any) -> str:
        """
        Normaliza texto eliminando acentos, manteniendo la Ñ.
        Convierte a mayúsculas.

        Args:
            texto (Any): Texto de entrada.

        Returns:
            str: Texto limpio y en mayúsculas.
        """
        if Sanitizer.es_vacio(texto):
            return ""

        txt = str(texto).strip()
        # Protección de la Ñ
        txt = txt.replace("ñ", "__ENYE__").replace("Ñ", "__ENYE_MAYUS__")

        # Normalización unicode (eliminar tildes)
        txt = unicodedata.normalize("NFD", txt)
        txt = "".join(c for c in txt if unicodedata.category(c) != "Mn")

        # Restauración de la Ñ y mayúsculas
        txt = txt.replace("__ENYE__", "ñ").replace("__ENYE_MAYUS__", "Ñ")
        return txt.upper()

    @staticmethod
    def a_texto(valor: Any) -> Optional[str]:
        """
        Convierte una celda a texto recortado.

        Los números enteros que pandas entrega como float (45875.0) se
        escriben sin decimales y las fechas ya convertidas por el lector se
        devuelven como dd/mm/yyyy.

        Args:
            valor (Any): Valor crudo de la celda.

        Returns:
            str | None: Texto limpio o None si queda vacío.
        """
        if Sanitizer.es_vacio(valor):
            return None
        if isinstance(valor, float) and valor.is_integer():
            valor = int(valor)
        elif isinstance(valor, (datetime, date)):
            valor = valor.strftime("%d/%m/%Y")
        texto = str(valor).strip()
        return texto or None

    @staticmethod
    def a_numero(valor: Any) -> Optional[float]:
        """
        Convierte un valor a número, aceptando coma decimal.

        Args:
            valor (Any): Valor de entrada (str, int, float).

        Returns:
            float | None: Valor numérico finito o None si no es numérico.
        """
        if isinstance(valor, bool) or Sanitizer.es_vacio(valor):
            return None
        if isinstance(valor, (int, float)):
            numero = float(valor)
        else:
            s_val = str(valor).strip().replace(',', '.')
            try:
                numero = float(s_val)
            except ValueError:
                return None
        if not math.isfinite(numero):
            return None
        return numero

    @staticmethod
    def a_entero(valor: Any) -> Optional[int]:
        """
        Convierte una celda a entero sin inventar ceros.

        Los decimales se truncan (12.7 -> 12). Cualquier valor que no sea
        numérico devuelve None para que el campo se omita.

        Args:
            valor (Any): Valor crudo de la celda.

        Returns:
            int | None: Entero o None si la conversión falla.
        """
        if isinstance(valor, int) and not isinstance(valor, bool):
            return valor
        numero = Sanitizer.a_numero(valor)
        if numero is None:
            return None
        return int(numero)
