#  Copyright (c) 2026 Fleer
import os
import sys
from dotenv import load_dotenv, set_key

# 1. DETERMINAR RUTAS BASE
if getattr(sys, 'frozen', False):
    # Si es .exe, BASE_DIR será la carpeta del ejecutable
    BASE_DIR = os.path.dirname(sys.executable)
else:
    # Si es Python normal, la carpeta del script
    BASE_DIR = os.path.dirname(os.path.abspath(__file__))

ENV_PATH = os.path.join(BASE_DIR, '.env')
if os.path.exists(ENV_PATH):
    load_dotenv(ENV_PATH)

def actualizar_env(clave, valor):
    """Actualiza o crea una variable de entorno en el archivo .env.

    Se utiliza para dejar persistidos los umbrales del semáforo que el
    administrador fija desde la línea de comandos.

    Args:
        clave (str): Nombre de la variable de entorno.
        valor (str): Valor a asignar.
    """
    if not os.path.exists(ENV_PATH):
        with open(ENV_PATH, 'w') as f: f.write("")
    set_key(ENV_PATH, clave, str(valor))
    os.environ[clave] = str(valor)


def _entero_env(clave, defecto):
    try:
        return int(os.getenv(clave, defecto))
    except (TypeError, ValueError):
        return defecto


# 2. CONFIGURACIÓN DE BASE DE DATOS
def construir_database_url(entorno=None) -> str:
    """Arma la URL de SQLAlchemy a partir de las variables DB_*.

    Con DB_TYPE=sqlite (por defecto) usa DB_NAME junto a BASE_DIR. Para
    PostgreSQL exige DB_USER, DB_PASS, DB_HOST y DB_NAME_REMOTE; si falta
    alguna se usa un archivo SQLite de respaldo.

    Args:
        entorno (Mapping, optional): Variables a usar; por defecto os.environ.

    Returns:
        str: URL de conexión.
    """
    entorno = os.environ if entorno is None else entorno
    if entorno.get("DB_TYPE", "sqlite") == "sqlite":
        return f"sqlite:///{os.path.join(BASE_DIR, entorno.get('DB_NAME', 'expedientes.db'))}"

    partes = [entorno.get(k) for k in ("DB_USER", "DB_PASS", "DB_HOST", "DB_NAME_REMOTE")]
    if not all(partes):
        return f"sqlite:///{os.path.join(BASE_DIR, 'temp_fallback.db')}"
    usuario, clave, host, nombre = partes
    return f"postgresql://{usuario}:{clave}@{host}:{entorno.get('DB_PORT', '5432')}/{nombre}"


DATABASE_URL = construir_database_url()

# 3. IMPORTACIÓN
# Máximo de registros por llamada al almacén (límite de tamaño de la carga)
TAMANO_LOTE_MAXIMO = 200
TAMANO_LOTE_IMPORTACION = min(max(_entero_env("TAMANO_LOTE_IMPORTACION", 200), 1), TAMANO_LOTE_MAXIMO)

# 4. SEMÁFORO
# Archivo JSON opcional con reglas de color alternativas
REGLAS_SEMAFORO_PATH = os.getenv("REGLAS_SEMAFORO_PATH")
# Umbrales con los que se siembra una base de datos nueva
SEMAFORO_VERDE_MAX = _entero_env("SEMAFORO_VERDE_MAX", 30)
SEMAFORO_AMARILLO_MAX = _entero_env("SEMAFORO_AMARILLO_MAX", 90)

# 5. REGISTRO (logging)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
APP_TITLE = "Sistema de Gestión Documental"
