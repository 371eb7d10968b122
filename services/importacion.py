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
from typing import Iterable, List

from config.mappings import CATEGORIAS
from controllers.import_processor import EnrutadorHojas, HojaCruda, NormalizadorRegistros
from database.config import TAMANO_LOTE_IMPORTACION, TAMANO_LOTE_MAXIMO
from database.schemas import EstadisticasHoja, RegistroCanonico, ResumenImportacion
from services.persistence import AlmacenExpedientes
from utilities.errores import ErrorPersistencia

logger = logging.getLogger(__name__)


class OrquestadorImportacion:
    """Importación masiva de un libro de Excel al almacén de expedientes.

    Recorre las hojas en orden, las enruta a su categoría, normaliza sus filas
    y guarda los registros en lotes secuenciales.

    ADVERTENCIA: con `reemplazar_todo=True` la importación es de dos pasos no
    transaccionales: primero se borran TODOS los expedientes y luego se
    insertan los lotes. Si la corrida se interrumpe después del borrado el
    almacén puede quedar vacío o con solo los lotes ya confirmados, nunca
    mezclado con datos anteriores. Los lectores concurrentes pueden ver el
    almacén a medio reemplazar.
    """

    def __init__(self, enrutador: EnrutadorHojas, normalizador: NormalizadorRegistros,
                 almacen: AlmacenExpedientes, tamano_lote: int = TAMANO_LOTE_IMPORTACION,
                 registrar_diagnosticos: bool = False):
        """
        Args:
            enrutador (EnrutadorHojas): Enrutador hoja -> categoría.
            normalizador (NormalizadorRegistros): Normalizador de filas.
            almacen (AlmacenExpedientes): Destino de los registros.
            tamano_lote (int): Registros por llamada al almacén (1..200).
            registrar_diagnosticos (bool): Si True el resumen incluye la lista
                de mensajes por fila.

        Raises:
            ValueError: Si el tamaño de lote está fuera de 1..200.
        """
        if not 1 <= tamano_lote <= TAMANO_LOTE_MAXIMO:
            raise ValueError(f"El tamaño de lote debe estar entre 1 y {TAMANO_LOTE_MAXIMO}")
        self.enrutador = enrutador
        self.normalizador = normalizador
        self.almacen = almacen
        self.tamano_lote = tamano_lote
        self.registrar_diagnosticos = registrar_diagnosticos

    def importar(self, libro: Iterable[HojaCruda], reemplazar_todo: bool = False) -> ResumenImportacion:
        """Importa todas las hojas reconocidas de un libro.

        Args:
            libro (Iterable[Tuple[str, Sequence[dict]]]): Pares (nombre_hoja, filas).
            reemplazar_todo (bool): Si True borra todos los expedientes antes
                de insertar.

        Returns:
            ResumenImportacion: Conteos por categoría, total y descartes.
                `registros_confirmados` suma lo que informa el almacén por
                lote, acotado al tamaño de cada lote.

        Raises:
            ErrorPersistencia: Si el almacén falla; incluye cuántos registros
                quedaron confirmados.
        """
        resumen = ResumenImportacion(reemplazo_total=reemplazar_todo)
        if self.registrar_diagnosticos:
            resumen.diagnosticos = []

        por_categoria = {c: [] for c in CATEGORIAS}

        for nombre_hoja, filas in libro:
            categoria = self.enrutador.enrutar(nombre_hoja)
            if categoria is None:
                logger.warning("Hoja '%s' no reconocida, se omite", nombre_hoja)
                resumen.hojas_no_reconocidas.append(nombre_hoja)
                if resumen.diagnosticos is not None:
                    resumen.diagnosticos.append(f"[{nombre_hoja}] hoja no reconocida, se omite")
                continue

            estadisticas = EstadisticasHoja(
                hoja=nombre_hoja, categoria=categoria,
                diagnosticos=[] if self.registrar_diagnosticos else None,
            )
            registros = self.normalizador.normalizar(filas, categoria, estadisticas)
            por_categoria[categoria].extend(registros)
            resumen.agregar_hoja(estadisticas)
            if resumen.diagnosticos is not None:
                resumen.diagnosticos.extend(estadisticas.diagnosticos)

            logger.debug("Hoja '%s' -> %s: %s registros de %s filas",
                         nombre_hoja, categoria, estadisticas.registros, estadisticas.filas_leidas)

        if resumen.sin_hojas_reconocidas:
            logger.warning("Ninguna hoja del libro coincide con una categoría conocida")
            return resumen

        registros = [r for c in CATEGORIAS for r in por_categoria[c]]
        if not registros:
            logger.warning("Las hojas reconocidas no contienen registros válidos; no se modifica el almacén")
            return resumen

        self._persistir(registros, reemplazar_todo, resumen)
        logger.info("Importación completada: %s registros (%s)", resumen.total,
                    ", ".join(f"{c}={n}" for c, n in resumen.conteos.items() if n))
        return resumen

    def _persistir(self, registros: List[RegistroCanonico], reemplazar_todo: bool,
                   resumen: ResumenImportacion):
        lotes = [registros[i:i + self.tamano_lote] for i in range(0, len(registros), self.tamano_lote)]

        if reemplazar_todo:
            try:
                self.almacen.eliminar_todos()
            except Exception as e:
                raise ErrorPersistencia(
                    f"No se pudo vaciar el almacén antes de importar: {e}",
                    registros_confirmados=0, lote_fallido=None, total_lotes=len(lotes),
                    eliminacion_realizada=False, resumen=resumen,
                ) from e
            logger.info("Almacén vaciado antes de la importación (reemplazo total)")

        for numero, lote in enumerate(lotes, start=1):
            try:
                reportados = self.almacen.insertar_lote(lote)
            except Exception as e:
                logger.error("Falló el lote %s de %s; %s registros ya confirmados",
                             numero, len(lotes), resumen.registros_confirmados)
                raise ErrorPersistencia(
                    f"Falló el lote {numero} de {len(lotes)}: {e}. "
                    f"Registros confirmados antes de la falla: {resumen.registros_confirmados}",
                    registros_confirmados=resumen.registros_confirmados, lote_fallido=numero,
                    total_lotes=len(lotes), eliminacion_realizada=reemplazar_todo, resumen=resumen,
                ) from e

            if reportados != len(lote):
                logger.warning("El almacén informó %s registros para un lote de %s", reportados, len(lote))
            # Nunca se cuentan más registros de los que el almacén confirma
            resumen.registros_confirmados += max(0, min(reportados, len(lote)))
            logger.debug("Lote %s/%s guardado (%s registros)", numero, len(lotes), len(lote))
