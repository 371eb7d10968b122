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

from datetime import date, datetime, timedelta
from typing import Any

from utilities.sanitizer import Sanitizer

EPOCA_EXCEL = datetime(1899, 12, 30)
"""datetime: Día cero de los seriales de fecha de Excel (sistema 1900)."""

SERIAL_MINIMO = 40000  # exclusivo, 06/07/2009
SERIAL_MAXIMO = 60000  # exclusivo, 08/04/2064

SIN_VALOR = "—"


def serial_a_fecha(valor: Any) -> str:
    """Convierte un serial de fecha de Excel (ej. 45875) a texto dd/mm/yy.

    - Si el valor ya trae formato de fecha (contiene '/' o un '-' en un texto
      de más de 5 caracteres) se devuelve tal cual.
    - Si es un número estrictamente entre 40000 y 60000 se suma a la época
      1899-12-30 y se formatea como dd/mm/yy.
    - Cualquier otro valor (vacío, no numérico, fuera de rango) devuelve "—".

    Nunca lanza excepciones.

    Args:
        valor (Any): Serial numérico o texto de la celda.

    Returns:
        str: Fecha legible o el marcador "—".
    """
    if isinstance(valor, (datetime, date)) and not Sanitizer.es_vacio(valor):
        return valor.strftime("%d/%m/%y")
    if Sanitizer.es_vacio(valor):
        return SIN_VALOR

    texto = str(valor).strip()
    if "/" in texto or ("-" in texto and len(texto) > 5):
        return texto

    numero = Sanitizer.a_numero(texto)
    if numero is None or not SERIAL_MINIMO < numero < SERIAL_MAXIMO:
        return SIN_VALOR

    fecha = EPOCA_EXCEL + timedelta(days=numero)
    return fecha.strftime("%d/%m/%y")
