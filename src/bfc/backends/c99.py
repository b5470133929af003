from __future__ import annotations

from typing import List

from .structured import StructuredGenerator


class CCodeGenerator(StructuredGenerator):
    """C99 console program; cells are a zero-initialized ``stdint.h`` array."""

    name = 'C99'
    description = 'C99 code generator'
    extension = 'c'

    write_cell = 'putchar((char)mem[ptr]);'
    read_cell = 'mem[ptr]=getchar();'

    def prologue(self) -> List[str]:
        return [
            '#include <stdio.h>',
            '#include <stdint.h>',
            'int main(){',
            '\tint ptr=0;',
            f"\t{self.data_type.c_name} mem[{self.memory_size}]={{0}};",
        ]

    def epilogue(self) -> List[str]:
        return [
            '\treturn (int)mem[ptr];',
            '}',
        ]
