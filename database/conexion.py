#  Copyright (c) 2026 Fleer
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import DATABASE_URL  # <--- Importamos desde config

URLS_MEMORIA = ("sqlite://", "sqlite:///:memory:")


def crear_motor(url: str = DATABASE_URL) -> Engine:
    """Crea el motor SQLAlchemy para la URL dada.

    Las bases SQLite en memoria usan una única conexión compartida; de lo
    contrario cada sesión vería una base vacía distinta.

    Args:
        url (str): URL de conexión; por defecto la de `config`.

    Returns:
        Engine: Motor listo para usar.
    """
    if url in URLS_MEMORIA:
        return create_engine(url, connect_args={"check_same_thread": False}, poolclass=StaticPool)
    # echo=True solo si quieres ver el SQL en consola
    return create_engine(url, echo=False)


def crear_fabrica_sesiones(motor: Engine) -> sessionmaker:
    """Fábrica de sesiones con la configuración usada por los modelos CRUD."""
    return sessionmaker(autocommit=False, autoflush=False, bind=motor)


# Escuchamos el evento en TODOS los motores, pero validamos dentro
# si la conexión específica es SQLite antes de ejecutar el comando.
@event.listens_for(Engine, "connect")
def activar_foreign_keys_sqlite(dbapi_connection, connection_record):
    """Activa el soporte de claves foráneas (Foreign Keys) para conexiones SQLite.

    SQLAlchemy no habilita esto por defecto en SQLite. Se ejecuta automáticamente
    al conectar si el driver es 'sqlite3'.

    Args:
        dbapi_connection: La conexión cruda de la DBAPI.
        connection_record: El registro de contexto de la conexión.
    """
    if "sqlite3" not in str(dbapi_connection.__class__.__module__):
        return
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON")
    finally:
        cursor.close()


engine = crear_motor()
SessionLocal = crear_fabrica_sesiones(engine)
Base = declarative_base()
