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

from datetime import datetime

import ulid
from sqlalchemy import Column, DateTime, Enum, Integer, String, Text

from config.mappings import CATEGORIAS
from config.semaforo import AMARILLO_MAX_DEFECTO, VERDE_MAX_DEFECTO
from database.conexion import Base


def generar_uid() -> str:
    """ULID de 26 caracteres; ordena los expedientes por momento de creación."""
    return str(ulid.new())


# ---------------- MODELOS ----------------

class Expediente(Base):
    """Expediente de cualquiera de las seis categorías; `categoria` indica a cuál pertenece."""
    __tablename__ = "expedientes"

    id = Column(String(26), primary_key=True, default=generar_uid, index=True)
    categoria = Column(Enum(*CATEGORIAS, name="categoria_expediente"), nullable=False, index=True)
    numero = Column(Integer)
    abogado = Column(Text)
    tema = Column(Text)
    sujeto = Column(Text)
    elecciones = Column(Text)
    lugar = Column(Text)
    radicado_cne = Column(String(100))

    # Etapas (OF, IP, FC, PR/P, AC, DF, RC/R) - marcas X o P
    etapa_of = Column(String(20))
    etapa_ip = Column(String(20))
    etapa_fc = Column(String(20))
    etapa_pr = Column(String(20))
    etapa_ac = Column(String(20))
    etapa_df = Column(String(20))
    etapa_rc = Column(String(20))

    etapa = Column(Text)
    estado = Column(Text)
    fecha_recibido = Column(String(30))
    dias_despacho = Column(Integer)
    dias_etapa = Column(Integer)
    devuelto = Column(Integer)

    # Columnas de seguimiento / semáforo
    en_estudio_abogado = Column(String(50))
    devuelto_estudio = Column(String(50))
    diana_ramos = Column(String(50))
    dr_laureano = Column(String(50))
    dr_uriel = Column(String(50))
    en_terminos = Column(String(50))
    en_sala = Column(String(50))
    en_firmas = Column(String(50))
    notif_continua_proceso = Column(String(50))
    notif_sigue_archivo = Column(String(50))
    interpone_recurso_archivo = Column(String(50))
    pausa = Column(String(50))
    observaciones = Column(Text)

    color = Column(String(20))
    anio = Column(Integer)
    fecha_archivo = Column(String(30))

    # Salvamentos y aclaraciones
    tipo_salvamento = Column(String(30))
    ponente = Column(Text)
    resolucion = Column(Text)
    semaforo_dias = Column(Integer)
    en_abogado = Column(String(50))
    devuelto_abogado = Column(String(50))

    creado_en = Column(DateTime, default=datetime.now, nullable=False)
    actualizado_en = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)


CAMPOS_EXPEDIENTE = tuple(
    c.name for c in Expediente.__table__.columns
    if c.name not in ("id", "categoria", "creado_en", "actualizado_en")
)
"""tuple: Campos canónicos que la tabla `expedientes` puede guardar."""


class SemaforoConfig(Base):
    """Parámetros editables del semáforo de días en despacho (rojo = todo lo que supere amarillo_max)."""
    __tablename__ = "semaforo_config"

    id = Column(Integer, primary_key=True, autoincrement=True)
    nombre = Column(String(50), nullable=False, unique=True)
    verde_max = Column(Integer, default=VERDE_MAX_DEFECTO, nullable=False)
    amarillo_max = Column(Integer, default=AMARILLO_MAX_DEFECTO, nullable=False)
    version = Column(Integer, default=1, nullable=False)
    actualizado_en = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)
