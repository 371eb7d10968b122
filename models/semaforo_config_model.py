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

import logging

from config.semaforo import AMARILLO_MAX_DEFECTO, VERDE_MAX_DEFECTO
from database.base_model import BaseCRUDModel
from database.models import SemaforoConfig
from database.schemas import UmbralesGlobales

logger = logging.getLogger(__name__)

NOMBRE_CONFIG = "default"


class SemaforoConfigModel(BaseCRUDModel):
    """Modelo CRUD para los umbrales globales del semáforo.

    Solo existe una fila ('default'). Cada cambio incrementa `version` para que
    los lectores puedan detectar qué instantánea usaron.
    """
    model = SemaforoConfig

    def obtener_umbrales(self) -> UmbralesGlobales:
        """Devuelve los umbrales vigentes (30/90 si la tabla está vacía)."""
        config = self.search(filters={"nombre": NOMBRE_CONFIG}, first=True)
        if not config:
            return UmbralesGlobales(VERDE_MAX_DEFECTO, AMARILLO_MAX_DEFECTO, version=0)
        return UmbralesGlobales(config.verde_max, config.amarillo_max, version=config.version)

    def establecer_umbrales(self, verde_max: int, amarillo_max: int) -> UmbralesGlobales:
        """Valida y guarda nuevos umbrales.

        La validación ocurre antes de abrir la transacción: si falla, los
        umbrales anteriores siguen vigentes.

        Args:
            verde_max (int): Días máximos en verde.
            amarillo_max (int): Días máximos en amarillo.

        Returns:
            UmbralesGlobales: La nueva instantánea guardada.

        Raises:
            ConfiguracionInvalidaError: Si verde_max >= amarillo_max o fuera de rango.
        """
        UmbralesGlobales(verde_max, amarillo_max)

        with self._transaccion() as session:
            config = session.query(SemaforoConfig).filter_by(nombre=NOMBRE_CONFIG) \
                .with_for_update().first()
            if config:
                config.verde_max = verde_max
                config.amarillo_max = amarillo_max
                config.version = (config.version or 0) + 1
            else:
                config = SemaforoConfig(nombre=NOMBRE_CONFIG, verde_max=verde_max,
                                        amarillo_max=amarillo_max, version=1)
                session.add(config)
            session.flush()
            nuevo = UmbralesGlobales(config.verde_max, config.amarillo_max, version=config.version)

        logger.info("Umbrales del semáforo guardados: verde<=%s, amarillo<=%s (v%s)",
                    nuevo.verde_max, nuevo.amarillo_max, nuevo.version)
        return nuevo

    def asegurar_configuracion(self, verde_max: int = VERDE_MAX_DEFECTO,
                               amarillo_max: int = AMARILLO_MAX_DEFECTO) -> bool:
        """Crea la fila por defecto si no existe.

        Args:
            verde_max (int): Límite verde inicial.
            amarillo_max (int): Límite amarillo inicial.

        Returns:
            bool: True si se insertó la fila.

        Raises:
            ConfiguracionInvalidaError: Si los valores iniciales no son válidos.
        """
        if self.search(filters={"nombre": NOMBRE_CONFIG}, first=True):
            return False
        UmbralesGlobales(verde_max, amarillo_max)
        self.create({"nombre": NOMBRE_CONFIG, "verde_max": verde_max,
                     "amarillo_max": amarillo_max, "version": 1})
        return True
