#!/usr/bin/env python3
"""
asm2ms Assembler Demo
=====================

This script demonstrates how to use the assembler library to:
1. Encode single instructions
2. Assemble a program held in a string
3. Inspect rejected lines
4. Write a .ms file and a listing

Usage:
    python examples/assembler_demo.py
"""

from pathlib import Path
from asm2ms import Assembler, AssemblerConfig, RecordFormat, encode


SOURCE = """movi R1, 5
movi R2, 10
add R0, R1, R2
load R3, R0
mov R1, R9
jnz R0, 4
nop
"""


def main():
    output_dir = Path("trash")
    output_dir.mkdir(exist_ok=True)

    # ==========================================================================
    # 1. Encode single instructions
    # ==========================================================================
    # load/loadi put (register << 1) + 1 in the destination field

    print("Single instructions:")
    for mnemonic, operands in [("mov", ["R1", "R2"]), ("load", ["R2", "R1"])]:
        print(f"  {mnemonic} {', '.join(operands):<8} -> {encode(mnemonic, operands)}")

    # ==========================================================================
    # 2. Assemble a program
    # ==========================================================================

    asm = Assembler()
    output = asm.assemble_string(SOURCE, "demo.asm")
    print(f"\nAssembled {len(asm.get_records())} instructions ({len(output)} bytes)")

    # ==========================================================================
    # 3. Rejected lines
    # ==========================================================================
    # Bad lines are left out of the output and collected as errors

    if asm.has_errors():
        print("\nRejected lines:")
        print(asm.get_error_report())

    # ==========================================================================
    # 4. Write the output
    # ==========================================================================

    asm.write_output(output_dir / "demo.ms")
    asm.write_listing(output_dir / "demo.lst")
    print(f"\nListing:\n{asm.get_listing()}")

    # Same program in the separator-less record format
    bare = Assembler(AssemblerConfig(record_format=RecordFormat.BARE, sync=False))
    bare.assemble_string(SOURCE, "demo.asm")
    bare.write_output(output_dir / "demo_bare.ms")
    print(f"Wrote {output_dir / 'demo.ms'} and {output_dir / 'demo_bare.ms'}")


if __name__ == "__main__":
    main()
