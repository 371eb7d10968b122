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

import random

from faker import Faker

from config.mappings import ALIAS_COLUMNAS, COLUMNAS_ETAPA, RUTAS_HOJAS

# Inicializar Faker
faker = Faker("es_ES")  # Español

# Opciones para campos
ESTADOS = ["Oficios", "Indagación Preliminar", "Formulación de Cargos", "Pruebas",
           "Decisión Final", "Recurso", "Pausa", "Pendiente Archivar"]
ETAPAS = ["Ordinario", "Procesos y Prácticas", "Ordinario - Revocatoria"]
COLORES = ["VERDE", "AMARILLO", "ROJO", ""]


def _encabezado(campo):
    """Primer encabezado declarado para un campo canónico."""
    return next(patron for patron, c in ALIAS_COLUMNAS if c == campo)


def generar_fila_aleatoria(semilla_serial: int = 45000):
    """Genera una fila de Excel ficticia con encabezados reales.

    Returns:
        dict: {encabezado: valor} listo para el normalizador.
    """
    fila = {
        _encabezado("abogado"): faker.name(),
        _encabezado("tema"): faker.sentence(nb_words=4).rstrip("."),
        _encabezado("sujeto"): faker.company(),
        _encabezado("lugar"): faker.city(),
        _encabezado("radicado_cne"): f"CNE-E-{faker.random_number(digits=4, fix_len=True)}-{random.randint(2022, 2026)}",
        _encabezado("estado"): random.choice(ESTADOS),
        _encabezado("etapa"): random.choice(ETAPAS),
        _encabezado("fecha_recibido"): semilla_serial + random.randint(0, 1200),
        _encabezado("dias_despacho"): random.randint(1, 200),
        _encabezado("dias_etapa"): random.randint(1, 120),
        _encabezado("devuelto"): random.randint(0, 4),
        _encabezado("en_terminos"): random.randint(-20, 5),
        _encabezado("en_estudio_abogado"): random.choice(["", random.randint(1, 15)]),
        _encabezado("color"): random.choice(COLORES),
    }
    etapa = random.choice(COLUMNAS_ETAPA)
    fila[_encabezado(etapa)] = random.choice(["X", "P"])
    return fila


def generar_libro_aleatorio(cantidad: int = 50):
    """Genera un libro ficticio repartido entre todas las categorías.

    Args:
        cantidad (int): Número aproximado de filas en total.

    Returns:
        list[tuple[str, list[dict]]]: Hojas con nombres reconocibles.
    """
    nombres = list(dict.fromkeys(categoria for _, categoria in RUTAS_HOJAS))
    hojas = {categoria: [] for categoria in nombres}
    for _ in range(cantidad):
        hojas[random.choice(nombres)].append(generar_fila_aleatoria())

    patron_de = {}
    for patron, categoria in RUTAS_HOJAS:
        patron_de.setdefault(categoria, patron.strip())
    return [(patron_de[c], filas) for c, filas in hojas.items()]
