from __future__ import annotations

from typing import List

from .structured import StructuredGenerator


class CSharpGenerator(StructuredGenerator):
    """Generates C# source code for a console application."""

    name = 'C#'
    description = 'C# code generator'
    extension = 'cs'

    base_indent = 2

    write_cell = 'Console.Write((char)mem[ptr]);'

    @property
    def read_cell(self) -> str:
        return f"mem[ptr]=({self.data_type.name})Console.Read();"

    def prologue(self) -> List[str]:
        return [
            'using System;',
            'public static class BF',
            '{',
            '\tpublic static int Main()',
            '\t{',
            '\t\tint ptr=0;',
            f"\t\tvar mem=new {self.data_type.name}[{self.memory_size}];",
        ]

    def epilogue(self) -> List[str]:
        return [
            '\t\treturn (int)mem[ptr];',
            '\t}',
            '}',
        ]

    def cell_update(self, increment: bool, count: int) -> str:
        # C# rejects compound assignment of a constant that does not fit the
        # cell type, so reduce it to the equivalent in-range amount first.
        data_type = self.data_type
        count %= data_type.modulus
        if count > data_type.max:
            increment = not increment
            count = data_type.modulus - count
        if count > data_type.max:
            # half the modulus on a signed type: +n and -n are both MinValue
            return self.cell_add.format(n=data_type.min)
        return super().cell_update(increment, count)
