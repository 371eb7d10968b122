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

"""Configuración de mapeos y constantes para la importación de expedientes.

Este módulo define las estructuras de datos estáticas utilizadas para
enrutar las hojas del libro de Excel a su categoría, traducir los
encabezados históricos a campos canónicos y decidir el tipo de cada campo.

Las tablas de alias y de rutas son tuplas ORDENADAS: cuando dos entradas
pueden coincidir, gana la primera declarada.
"""

CATEGORIAS = (
    "procesos_practicas",
    "inf_logos",
    "revocatorias",
    "inf_ordinarios",
    "salvamentos",
    "archivados",
)
"""tuple: Identificadores de las seis categorías de expedientes."""

NOMBRES_CATEGORIAS = {
    "procesos_practicas": "Procesos y Prácticas",
    "inf_logos": "Inf. Logos",
    "revocatorias": "Revocatorias",
    "inf_ordinarios": "Inf. Ordinarios",
    "salvamentos": "Salvamentos y Aclaraciones",
    "archivados": "Archivados",
}
"""dict: Nombre visible de cada categoría."""

DESCRIPCIONES_CATEGORIAS = {
    "procesos_practicas": "Registro de logos de procesos y prácticas organizativas",
    "inf_logos": "Informes de registro de logosímbolos",
    "revocatorias": "Revocatorias de inscripción",
    "inf_ordinarios": "Investigaciones e informes ordinarios",
    "salvamentos": "Salvamentos de voto y aclaraciones pendientes",
    "archivados": "Expedientes archivados",
}

# Rutas hoja -> categoría (coincidencia por subcadena, la primera gana)
RUTAS_HOJAS = (
    ("PROCESOS Y PRACTICAS", "procesos_practicas"),
    ("PROCESOS Y PRÁCTICAS", "procesos_practicas"),
    ("INF LOGOS", "inf_logos"),
    ("REVOCATORIAS", "revocatorias"),
    ("INF ORDINARIOS", "inf_ordinarios"),
    ("SALVAMENTOS Y ACLARACIONES P", "salvamentos"),
    ("SALVAMENTOS Y ACLARACIONES", "salvamentos"),
    ("SALVAMENTOS", "salvamentos"),
    ("ACLARACIONES", "salvamentos"),
    ("ARCHIVADOS ", "archivados"),
    ("ARCHIVADOS", "archivados"),
)
"""tuple: Pares (patrón, categoría) evaluados en orden sobre el nombre de la hoja.

El nombre de la hoja se recorta y se pasa a mayúsculas; el patrón NO se
recorta, de modo que "ARCHIVADOS " solo coincide con hojas como
"ARCHIVADOS 2024". Los patrones más largos se declaran antes que los
patrones que contienen.
"""

# Encabezado de Excel -> campo canónico (coincidencia exacta, la primera gana)
ALIAS_COLUMNAS = (
    ("ABOGADO", "abogado"),
    ("TEMA", "tema"),
    ("SUJETO", "sujeto"),
    ("ELECCIONES Y/O CATEGORIA", "elecciones"),
    ("ELECCIONES", "elecciones"),
    ("CATEGORIA", "elecciones"),
    ("NOMBRE", "sujeto"),
    ("LUGAR", "lugar"),
    ("No. RADICADO CNE", "radicado_cne"),
    ("NO. RADICADO CNE", "radicado_cne"),
    ("RADICADO CNE", "radicado_cne"),
    ("RADICADO", "radicado_cne"),
    ("OFICIO", "etapa_of"),
    ("OF", "etapa_of"),
    ("IND. PRELIMINAR", "etapa_ip"),
    ("IP", "etapa_ip"),
    ("FOR. CARGOS", "etapa_fc"),
    ("FC", "etapa_fc"),
    ("PRUEBAS", "etapa_pr"),
    ("PR", "etapa_pr"),
    ("P", "etapa_pr"),
    ("ALE. CONCLUSIÓN", "etapa_ac"),
    ("AC", "etapa_ac"),
    ("DECISIÓN FINAL", "etapa_df"),
    ("DF", "etapa_df"),
    ("RECURSO", "etapa_rc"),
    ("R", "etapa_rc"),
    ("RC", "etapa_rc"),
    ("ETAPA", "etapa"),
    ("ESTADO", "estado"),
    ("FECHA RECIBIDO / REPARTO", "fecha_recibido"),
    ("FECHA RECIBIDO", "fecha_recibido"),
    ("DIAS EN DESPACHO", "dias_despacho"),
    ("DÍAS EN DESPACHO", "dias_despacho"),
    ("DIAS EN ETAPA", "dias_etapa"),
    ("DÍAS EN ETAPA", "dias_etapa"),
    ("# DE VECES QUE SE A DEVUELTO", "devuelto"),
    ("# DE VECES QUE SE HA DEVUELTO", "devuelto"),
    ("# VECES QUE SE HA DEVUELTO", "devuelto"),
    ("# DE VECES DEVUELTO", "devuelto"),
    ("# VECES DEVUELTO", "devuelto"),
    ("EN ESTUDIO POR EL ABOGADO", "en_estudio_abogado"),
    ("DEVUELTO - EN ESTUDIO POR EL ABOGADO", "devuelto_estudio"),
    ("DIANA RAMOS", "diana_ramos"),
    ("DR LAUREANO", "dr_laureano"),
    ("DR URIEL", "dr_uriel"),
    ("EN TÉRMINOS", "en_terminos"),
    ("EN SALA", "en_sala"),
    ("EN FIRMAS", "en_firmas"),
    ("EN NOTIFICACIÓN CONTINUA PROCESO", "notif_continua_proceso"),
    ("EN NOTIFICACIÓN SIGUE ARCHIVO", "notif_sigue_archivo"),
    ("INTERPONE RECURSO - ARCHIVO", "interpone_recurso_archivo"),
    ("PAUSA", "pausa"),
    ("OBSERVACIONES", "observaciones"),
    ("FECHA DE ARCHIVO", "fecha_archivo"),
    ("FECHA ARCHIVO", "fecha_archivo"),
    ("RESPONSABLE", "abogado"),
    ("PONENTE", "ponente"),
    ("EXPEDIENTE", "radicado_cne"),
    ("No. de RESOLUCIÓN", "resolucion"),
    ("NO. DE RESOLUCIÓN", "resolucion"),
    ("NO. RESOLUCIÓN", "resolucion"),
    ("NO. DE RESOLUCION", "resolucion"),
    ("RESOLUCIÓN", "resolucion"),
    ("RESOLUCION", "resolucion"),
    ("SÉMAFORO/DIAS EN DESPACHO", "semaforo_dias"),
    ("SEMÁFORO/DIAS EN DESPACHO", "semaforo_dias"),
    ("SEMAFORO/DIAS EN DESPACHO", "semaforo_dias"),
    ("SEMAFORO", "semaforo_dias"),
    ("EN EL ABOGADO", "en_abogado"),
    ("DEVUELTO AL ABOGADO", "devuelto_abogado"),
    ("# EPX", "numero"),
    ("AÑO", "anio"),
    ("ANIO", "anio"),
    ("COLOR", "color"),
    ("TIPO", "tipo_salvamento"),
)
"""tuple: Pares (encabezado, campo) con todas las grafías históricas conocidas.

OJO: "P" y "R" son marcas de una sola letra. "P" se traduce a la etapa de
pruebas igual que "PR"/"PRUEBAS", aunque en las celdas de etapa la letra P
también se usa como marca de "pendiente". Se conserva el orden declarado.
"""

CAMPOS_ENTEROS = frozenset({
    "dias_despacho",
    "dias_etapa",
    "devuelto",
    "semaforo_dias",
    "anio",
    "numero",
})
"""frozenset: Campos que se almacenan como enteros."""

CAMPOS_IDENTIDAD = (
    "abogado",
    "tema",
    "radicado_cne",
    "sujeto",
    "ponente",
    "resolucion",
)
"""tuple: Campos de los que al menos uno debe existir para aceptar una fila.

Evita que filas de formato o en blanco se conviertan en expedientes fantasma.
"""

COLUMNAS_FECHA = frozenset({
    "fecha_recibido",
    "fecha_archivo",
})
"""frozenset: Campos que el listado (`main.py listar`) decodifica con `serial_a_fecha`."""

COLUMNAS_ETAPA = (
    "etapa_of",
    "etapa_ip",
    "etapa_fc",
    "etapa_pr",
    "etapa_ac",
    "etapa_df",
    "etapa_rc",
)
