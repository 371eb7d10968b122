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

"""Reglas por defecto del semáforo de expedientes.

Cada regla es una tupla ``(campo, alcance, verde, amarillo, rojo_min)`` donde
``verde`` y ``amarillo`` son rangos inclusivos ``(min, max)`` y ``amarillo``
puede ser ``None``. El alcance es ``"general"`` o una categoría concreta.
"""

ALCANCE_GENERAL = "general"

CAMPO_DIAS_DESPACHO = "dias_despacho"
"""str: Campo que, sin regla propia, se clasifica con los umbrales globales."""

VERDE_MAX_DEFECTO = 30
AMARILLO_MAX_DEFECTO = 90

# Límites aceptados por la pantalla de administración
LIMITE_VERDE = (1, 365)
LIMITE_AMARILLO = (1, 730)

REGLAS_SEMAFORO = (
    # En estudio por el abogado y despachos de magistrados: 1-5 / 6-10 / >10
    ("en_estudio_abogado", ALCANCE_GENERAL, (1, 5), (6, 10), 11),
    ("diana_ramos", ALCANCE_GENERAL, (1, 5), (6, 10), 11),
    ("dr_laureano", ALCANCE_GENERAL, (1, 5), (6, 10), 11),
    ("dr_uriel", ALCANCE_GENERAL, (1, 5), (6, 10), 11),
    ("devuelto_estudio", ALCANCE_GENERAL, (1, 3), None, 4),
    ("en_terminos", ALCANCE_GENERAL, (-15, 1), None, 2),
    ("notif_continua_proceso", ALCANCE_GENERAL, (1, 15), (16, 20), 21),
    ("notif_sigue_archivo", ALCANCE_GENERAL, (1, 15), (16, 20), 21),
    ("interpone_recurso_archivo", ALCANCE_GENERAL, (-10, 1), None, 2),
    # Salvamentos y aclaraciones
    ("en_abogado", "salvamentos", (1, 2), None, 3),
    ("devuelto_abogado", "salvamentos", (1, 2), None, 3),
    ("diana_ramos", "salvamentos", (1, 1), None, 2),
    ("dr_laureano", "salvamentos", (1, 1), None, 2),
    ("dr_uriel", "salvamentos", (1, 1), None, 2),
)
