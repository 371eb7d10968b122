from typing import List, Optional, Protocol, Sequence

from database.schemas import RegistroCanonico, UmbralesGlobales
from models.expediente_model import ExpedienteModel
from models.semaforo_config_model import SemaforoConfigModel


class AlmacenExpedientes(Protocol):
    """Contrato del almacén de expedientes que consume la importación."""

    def eliminar_todos(self) -> None:
        ...

    def insertar_lote(self, registros: Sequence[RegistroCanonico]) -> int:
        ...

    def listar(self, categoria: str, filtro_abogado: Optional[str] = None) -> List[RegistroCanonico]:
        ...

    def obtener_umbrales(self) -> UmbralesGlobales:
        ...

    def establecer_umbrales(self, verde_max: int, amarillo_max: int) -> UmbralesGlobales:
        ...


class PersistenceService:
    """
    Servicio encargado de la persistencia de expedientes y de la configuración
    del semáforo sobre la base de datos relacional.

    Implementa el contrato `AlmacenExpedientes`; cada llamada abre y cierra su
    propia sesión, así que un lote confirmado no se deshace si falla el siguiente.
    """

    def __init__(self, session_factory=None):
        """
        Inicializa el servicio instanciando los modelos necesarios.

        Args:
            session_factory (sessionmaker, optional): Fábrica de sesiones a usar.
        """
        self.model_expediente = ExpedienteModel(session_factory)
        self.model_semaforo = SemaforoConfigModel(session_factory)

    def eliminar_todos(self) -> None:
        """Borra todos los expedientes (paso destructivo de la importación con reemplazo)."""
        self.model_expediente.eliminar_todos()

    def insertar_lote(self, registros: Sequence[RegistroCanonico]) -> int:
        """
        Guarda un lote de expedientes normalizados en una única transacción.

        Args:
            registros (Sequence[RegistroCanonico]): Registros del lote.

        Returns:
            int: Cantidad de registros guardados.
        """
        return self.model_expediente.insertar_lote(registros)

    def listar(self, categoria: str, filtro_abogado: Optional[str] = None) -> List[RegistroCanonico]:
        return self.model_expediente.listar(categoria, filtro_abogado)

    def obtener_umbrales(self) -> UmbralesGlobales:
        return self.model_semaforo.obtener_umbrales()

    def establecer_umbrales(self, verde_max: int, amarillo_max: int) -> UmbralesGlobales:
        return self.model_semaforo.establecer_umbrales(verde_max, amarillo_max)
