#!/usr/bin/env python3
"""Revisa el tamaño de los bundles JS del frontend contra un presupuesto.

Uso:
    # Después de compilar el frontend (carpeta .next por defecto)
    papalote-bundle-check

    # Otra carpeta de build
    papalote-bundle-check --build-dir frontend/.next --top 5

Sale con código 1 si la carpeta de build no existe o si algún presupuesto
de error se excede; con 0 en cualquier otro caso (las advertencias no
hacen fallar).
"""

import argparse
import os
import sys
from dataclasses import dataclass, field
from typing import List, Optional

# Presupuestos en KB, tamaño sin comprimir
BUDGETS = {
    'chunks': {'warning': 500, 'error': 1000},
    'shared': {'warning': 700, 'error': 1200},
}

SHARED_MARKERS = ('framework', 'main', 'webpack')
DEFAULT_TOP = 10


@dataclass
class Chunk:
    name: str
    size: int

    @property
    def kb(self) -> float:
        return self.size / 1024

    @property
    def is_shared(self) -> bool:
        return any(marker in self.name for marker in SHARED_MARKERS)


@dataclass
class BundleReport:
    chunks: List[Chunk] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def total_size(self) -> int:
        return sum(c.size for c in self.chunks)

    @property
    def shared_size(self) -> int:
        return sum(c.size for c in self.chunks if c.is_shared)

    @property
    def passed(self) -> bool:
        return not self.errors


def format_size(size: int) -> str:
    kb = size / 1024
    if kb < 1024:
        return f"{kb:.2f} KB"
    return f"{kb / 1024:.2f} MB"


def _status(size: int, budget: dict) -> str:
    kb = size / 1024
    if kb > budget['error']:
        return 'ERROR'
    if kb > budget['warning']:
        return 'WARN'
    return 'OK'


def scan_chunks(build_dir: str) -> List[Chunk]:
    """
    Todos los .js bajo <build_dir>/static/chunks (recursivo), el más grande
    primero. Los nombres son relativos a la carpeta de chunks.
    """
    chunks_dir = os.path.join(build_dir, 'static', 'chunks')
    chunks = []
    if not os.path.isdir(chunks_dir):
        return chunks
    for root, _dirs, files in os.walk(chunks_dir):
        for filename in files:
            if not filename.endswith('.js'):
                continue
            path = os.path.join(root, filename)
            name = os.path.relpath(path, chunks_dir).replace(os.sep, '/')
            chunks.append(Chunk(name=name, size=os.path.getsize(path)))
    chunks.sort(key=lambda c: c.size, reverse=True)
    return chunks


def analyze(build_dir: str) -> BundleReport:
    """Compara cada chunk y el JS compartido contra BUDGETS."""
    report = BundleReport(chunks=scan_chunks(build_dir))
    chunk_budget = BUDGETS['chunks']
    for chunk in report.chunks:
        if chunk.kb > chunk_budget['error']:
            report.errors.append(
                f"Chunk {chunk.name} ({format_size(chunk.size)}) excede el presupuesto de error de {chunk_budget['error']}KB"
            )
        elif chunk.kb > chunk_budget['warning']:
            report.warnings.append(
                f"Chunk {chunk.name} ({format_size(chunk.size)}) excede el presupuesto de advertencia de {chunk_budget['warning']}KB"
            )

    shared_budget = BUDGETS['shared']
    shared_kb = report.shared_size / 1024
    if shared_kb > shared_budget['error']:
        report.errors.append(
            f"JS compartido ({format_size(report.shared_size)}) excede el presupuesto de error de {shared_budget['error']}KB"
        )
    elif shared_kb > shared_budget['warning']:
        report.warnings.append(
            f"JS compartido ({format_size(report.shared_size)}) excede el presupuesto de advertencia de {shared_budget['warning']}KB"
        )
    return report


def print_report(report: BundleReport, top: int = DEFAULT_TOP) -> None:
    line = '-' * 55
    print("\nAnálisis de tamaño de bundles\n")
    print(line)
    print(f"\nTop {top} chunks más grandes:\n")
    for chunk in report.chunks[:top]:
        name = chunk.name if len(chunk.name) <= 40 else f"...{chunk.name[-37:]}"
        print(f"  [{_status(chunk.size, BUDGETS['chunks']):5}] {format_size(chunk.size):>12}  {name}")

    print(f"\n{line}\n")
    print("Resumen:\n")
    shared = BUDGETS['shared']
    print(f"  [{_status(report.shared_size, shared):5}] JS compartido: {format_size(report.shared_size)} "
          f"(presupuesto: {shared['warning']}KB advertencia / {shared['error']}KB error)")
    print(f"  Total JS:      {format_size(report.total_size)}")
    print(f"  Total chunks:  {len(report.chunks)}")

    if report.warnings:
        print(f"\nAdvertencias ({len(report.warnings)}):")
        for warning in report.warnings:
            print(f"  - {warning}")
    if report.errors:
        print(f"\nErrores ({len(report.errors)}):")
        for error in report.errors:
            print(f"  - {error}")

    print(f"\n{line}\n")
    if report.errors:
        print(f"Build fallido: {len(report.errors)} presupuesto(s) excedido(s).\n")
    elif report.warnings:
        print(f"Build aprobado con {len(report.warnings)} advertencia(s).\n")
    else:
        print("Todos los presupuestos se cumplen.\n")


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(
        description="Revisa el tamaño de los chunks JS del build contra los presupuestos."
    )
    ap.add_argument(
        "--build-dir",
        default=".next",
        help="Carpeta de salida del build (default: .next)",
    )
    ap.add_argument(
        "--top",
        type=int,
        default=DEFAULT_TOP,
        help=f"Cuántos chunks listar (default: {DEFAULT_TOP})",
    )
    args = ap.parse_args(argv)

    if not os.path.isdir(args.build_dir):
        print(f"Error: no se encontró la carpeta {args.build_dir}. Compila el frontend primero.",
              file=sys.stderr)
        return 1

    report = analyze(args.build_dir)
    print_report(report, args.top)
    return 0 if report.passed else 1


if __name__ == "__main__":
    sys.exit(main())
