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

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

import database.config as config
from database import models  # noqa: F401  registra las tablas en Base.metadata
from database.conexion import engine as engine_defecto, Base, SessionLocal
from models.semaforo_config_model import SemaforoConfigModel
from utilities.errores import ConfiguracionInvalidaError


def inicializar_base_de_datos(engine=None, session_factory=None) -> bool:
    """
    Crea la estructura de la base de datos si no existe
    y carga los datos iniciales (umbrales por defecto del semáforo).

    Args:
        engine (Engine, optional): Motor a usar; por defecto el de `conexion`.
        session_factory (sessionmaker, optional): Fábrica de sesiones asociada.

    Returns:
        bool: True si la base quedó lista.
    """
    engine = engine or engine_defecto
    session_factory = session_factory or SessionLocal
    print(f"🔄 Inicializando base de datos ({engine.dialect.name})...")

    # 1. Crear tablas
    try:
        Base.metadata.create_all(bind=engine)
        print("✅ Estructura de tablas verificada/creada.")
    except SQLAlchemyError as e:
        print(f"❌ Error crítico creando tablas: {e}")
        return False

    # 2. Población inicial
    verde, amarillo = config.SEMAFORO_VERDE_MAX, config.SEMAFORO_AMARILLO_MAX
    try:
        if inspect(engine).has_table("semaforo_config"):
            if SemaforoConfigModel(session_factory).asegurar_configuracion(verde, amarillo):
                print(f"ℹ️ Umbrales del semáforo inicializados ({verde}/{amarillo}).")
    except ConfiguracionInvalidaError as e:
        print(f"❌ Umbrales iniciales inválidos en .env: {e}")
        return False
    except SQLAlchemyError as e:
        print(f"❌ Error inicializando datos: {e}")
        return False
    return True
