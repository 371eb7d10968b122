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

import argparse
import logging
import sys

import database.config as config
from config.mappings import CATEGORIAS, COLUMNAS_FECHA, DESCRIPCIONES_CATEGORIAS, NOMBRES_CATEGORIAS
from config.semaforo import CAMPO_DIAS_DESPACHO
from controllers.import_processor import EnrutadorHojas, ExcelEngine, NormalizadorRegistros, TablaAlias
from database.prueba import generar_libro_aleatorio
from database.setup import inicializar_base_de_datos
from services.estadisticas import calcular_estadisticas, nivel_registro
from services.importacion import OrquestadorImportacion
from services.persistence import PersistenceService
from services.semaforo import ClasificadorSemaforo, TablaReglasSemaforo, cargar_reglas_json
from utilities.errores import ConfiguracionInvalidaError, ErrorPersistencia
from utilities.fechas import serial_a_fecha

logger = logging.getLogger(__name__)


def configurar_logging(nivel: str = config.LOG_LEVEL):
    logging.basicConfig(level=getattr(logging, nivel, logging.INFO),
                        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")


def construir_clasificador(almacen) -> ClasificadorSemaforo:
    """Clasificador con las reglas por defecto o las de REGLAS_SEMAFORO_PATH."""
    if config.REGLAS_SEMAFORO_PATH:
        logger.info("Usando reglas del semáforo de %s", config.REGLAS_SEMAFORO_PATH)
        tabla = cargar_reglas_json(config.REGLAS_SEMAFORO_PATH)
    else:
        tabla = TablaReglasSemaforo.por_defecto()
    return ClasificadorSemaforo(tabla, almacen)


def crear_orquestador(almacen, diagnostico: bool = False) -> OrquestadorImportacion:
    return OrquestadorImportacion(
        EnrutadorHojas(),
        NormalizadorRegistros(TablaAlias()),
        almacen,
        registrar_diagnosticos=diagnostico,
    )


def imprimir_resumen(resumen):
    print(resumen.mensaje())
    for categoria, total in resumen.conteos.items():
        if total:
            print(f"   • {NOMBRES_CATEGORIAS[categoria]}: {total}")
    if resumen.hojas_no_reconocidas:
        print(f"⚠️ Hojas omitidas: {', '.join(resumen.hojas_no_reconocidas)}")
    if resumen.filas_sin_identidad:
        print(f"ℹ️ Filas sin datos de identificación descartadas: {resumen.filas_sin_identidad}")
    if resumen.celdas_invalidas:
        print(f"ℹ️ Celdas numéricas inválidas omitidas: {resumen.celdas_invalidas}")
    for linea in resumen.diagnosticos or []:
        print(f"   {linea}")


def formatear_expediente(registro, clasificador, umbrales=None) -> str:
    """Línea de listado de un expediente con sus fechas ya legibles.

    Args:
        registro (Mapping): Expediente canónico.
        clasificador (ClasificadorSemaforo): Para el nivel del semáforo.
        umbrales (UmbralesGlobales, optional): Instantánea compartida por el listado.

    Returns:
        str: Radicado, abogado, tema, fechas, días en despacho y semáforo.
    """
    partes = [
        registro.get("radicado_cne") or "—",
        registro.get("abogado") or "—",
        registro.get("tema") or "—",
    ]
    for campo in sorted(COLUMNAS_FECHA):
        if registro.get(campo) is not None:
            partes.append(f"{campo}={serial_a_fecha(registro[campo])}")
    if registro.get(CAMPO_DIAS_DESPACHO) is not None:
        partes.append(f"{registro[CAMPO_DIAS_DESPACHO]} días")
    partes.append(nivel_registro(registro, clasificador, umbrales))
    return "   " + " | ".join(str(p) for p in partes)


# ----------------------------
# SUBCOMANDOS
# ----------------------------
def cmd_importar(args, almacen) -> int:
    motor = ExcelEngine(args.archivo)
    if not motor.cargar():
        print(f"❌ No se pudo leer el archivo: {motor.ultimo_error}")
        return 1

    if args.reemplazar:
        print("⚠️ Modo reemplazo: se eliminarán TODOS los expedientes antes de importar.")

    try:
        resumen = crear_orquestador(almacen, args.diagnostico).importar(motor.libro(), args.reemplazar)
    except ErrorPersistencia as e:
        print(f"❌ {e}")
        if e.eliminacion_realizada:
            print(f"⚠️ El almacén fue vaciado y solo quedaron {e.registros_confirmados} registros.")
        return 1

    imprimir_resumen(resumen)
    return 0 if resumen.total else 1


def cmd_umbrales(args, almacen) -> int:
    if (args.verde is None) != (args.amarillo is None):
        print("❌ Indique --verde y --amarillo juntos.")
        return 2

    if args.verde is not None:
        try:
            umbrales = almacen.establecer_umbrales(args.verde, args.amarillo)
        except ConfiguracionInvalidaError as e:
            print(f"❌ {e}")
            return 2
        if args.guardar_env:
            config.actualizar_env("SEMAFORO_VERDE_MAX", umbrales.verde_max)
            config.actualizar_env("SEMAFORO_AMARILLO_MAX", umbrales.amarillo_max)
            print(f"💾 Umbrales guardados en {config.ENV_PATH}")
    else:
        umbrales = almacen.obtener_umbrales()

    print(f"🟢 Verde: 1 a {umbrales.verde_max} días")
    print(f"🟡 Amarillo: {umbrales.verde_max + 1} a {umbrales.amarillo_max} días")
    print(f"🔴 Rojo: más de {umbrales.amarillo_max} días")
    print(f"   (versión {umbrales.version})")
    return 0


def cmd_estadisticas(args, almacen) -> int:
    categorias = [args.categoria] if args.categoria else list(CATEGORIAS)
    registros = [r for c in categorias for r in almacen.listar(c, args.abogado)]
    stats = calcular_estadisticas(registros, construir_clasificador(almacen))

    print(f"📊 Total de expedientes: {stats.total}")
    for categoria in categorias:
        print(f"   • {NOMBRES_CATEGORIAS[categoria]}: {stats.por_categoria[categoria]}")
    print("Semáforo: " + ", ".join(f"{nivel}={n}" for nivel, n in stats.semaforo.items()))
    if stats.por_abogado:
        print("Por abogado:")
        for abogado, total in sorted(stats.por_abogado.items(), key=lambda x: (-x[1], x[0])):
            print(f"   {abogado}: {total}")
    return 0


def cmd_listar(args, almacen) -> int:
    registros = almacen.listar(args.categoria, args.abogado)
    clasificador = construir_clasificador(almacen)
    umbrales = almacen.obtener_umbrales()

    print(f"📁 {NOMBRES_CATEGORIAS[args.categoria]}: {DESCRIPCIONES_CATEGORIAS[args.categoria]}")
    print(f"   {len(registros)} expedientes")
    for registro in registros[:args.limite]:
        print(formatear_expediente(registro, clasificador, umbrales))
    if len(registros) > args.limite:
        print(f"   ... y {len(registros) - args.limite} más")
    return 0


def cmd_semilla(args, almacen) -> int:
    resumen = crear_orquestador(almacen).importar(generar_libro_aleatorio(args.cantidad))
    imprimir_resumen(resumen)
    return 0


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="gestion-expedientes",
        description=f"{config.APP_TITLE}: importación de expedientes y semáforo de plazos.",
    )
    sub = parser.add_subparsers(dest="comando", required=True)

    p_imp = sub.add_parser("importar", help="Importar un libro .xlsx/.xls/.ods")
    p_imp.add_argument("archivo", help="Ruta al libro de Excel")
    p_imp.add_argument("--reemplazar", action="store_true",
                       help="Eliminar TODOS los expedientes antes de importar")
    p_imp.add_argument("--diagnostico", action="store_true",
                       help="Mostrar el detalle de celdas y filas descartadas")
    p_imp.set_defaults(func=cmd_importar)

    p_umb = sub.add_parser("umbrales", help="Ver o cambiar los umbrales de días en despacho")
    p_umb.add_argument("--verde", type=int, help="Días máximos en verde (1-365)")
    p_umb.add_argument("--amarillo", type=int, help="Días máximos en amarillo (1-730)")
    p_umb.add_argument("--guardar-env", action="store_true",
                       help="Guardar también los valores en el archivo .env")
    p_umb.set_defaults(func=cmd_umbrales)

    p_est = sub.add_parser("estadisticas", help="Resumen del tablero")
    p_est.add_argument("--categoria", choices=CATEGORIAS)
    p_est.add_argument("--abogado", help="Filtro parcial por abogado")
    p_est.set_defaults(func=cmd_estadisticas)

    p_lis = sub.add_parser("listar", help="Listar los expedientes de una categoría")
    p_lis.add_argument("categoria", choices=CATEGORIAS)
    p_lis.add_argument("--abogado", help="Filtro parcial por abogado")
    p_lis.add_argument("--limite", type=int, default=50, help="Máximo de expedientes a mostrar")
    p_lis.set_defaults(func=cmd_listar)

    p_sem = sub.add_parser("semilla", help="Cargar expedientes ficticios de prueba")
    p_sem.add_argument("--cantidad", type=int, default=50)
    p_sem.set_defaults(func=cmd_semilla)

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """
    Punto de entrada principal de la aplicación.

    1. Configura el registro (logging) con LOG_LEVEL.
    2. Inicializa la conexión y estructura de la base de datos.
    3. Ejecuta el subcomando solicitado contra el almacén SQLAlchemy.
    """
    args = parse_args(argv)
    configurar_logging()
    if not inicializar_base_de_datos():
        return 1
    return args.func(args, PersistenceService())


if __name__ == "__main__":
    sys.exit(main())
