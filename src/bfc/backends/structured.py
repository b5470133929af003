from __future__ import annotations

import logging

from abc import abstractmethod
from typing import Iterable, List, Sequence

from ..datatypes import DEFAULT_DATATYPE, DEFAULT_MEMSIZE, DataType
from ..errors import ConfigurationError, unsupported_instruction
from ..tokens import CLOSE, DEC, INC, INPUT, LEFT, OPEN, OUTPUT, RIGHT, ZERO, Token
from .base import BracketStack, CodeGenerator, indent


logger = logging.getLogger(__name__)


class StructuredGenerator(CodeGenerator):
    """Shared translation for targets with a native ``while`` loop.

    One indentation level per open loop on top of ``base_indent``; the
    surface syntax comes from the subclass.
    """

    newline = '\r\n'
    base_indent = 1

    # Statement templates, ``{n}`` is the repeat count
    ptr_inc = '++ptr;'
    ptr_add = 'ptr+={n};'
    ptr_dec = '--ptr;'
    ptr_sub = 'ptr-={n};'
    cell_inc = '++mem[ptr];'
    cell_add = 'mem[ptr]+={n};'
    cell_dec = '--mem[ptr];'
    cell_sub = 'mem[ptr]-={n};'
    loop_open = 'while(mem[ptr]!=0){'
    loop_close = '}'
    cell_zero = 'mem[ptr]=0;'
    write_cell = ''
    read_cell = ''

    def __init__(self, data_type: DataType = DEFAULT_DATATYPE, memory_size: int = DEFAULT_MEMSIZE):
        if memory_size < 1:
            raise ConfigurationError(f"Memory size must be at least 1 (got {memory_size})", argument=str(memory_size))
        if not isinstance(data_type, DataType):
            raise ConfigurationError(f"Invalid data type: {data_type}", argument=str(data_type))
        self.data_type = data_type
        self.memory_size = memory_size

    # ===== Configuration =====

    def configure(self, arguments: Sequence[str]) -> None:
        if len(arguments) != 2:
            raise ConfigurationError(
                f"This code generator requires exactly two arguments (got {len(arguments)}: {', '.join(arguments)})",
                argument=arguments[0] if arguments else None,
            )
        type_arg, size_arg = arguments
        try:
            data_type = DataType.parse(type_arg)
        except ValueError:
            raise ConfigurationError(
                f"Data type argument is invalid: '{type_arg}' (expected one of {', '.join(DataType.names())})",
                argument=type_arg,
            ) from None
        try:
            memory_size = int(size_arg)
        except ValueError:
            memory_size = 0
        if memory_size < 1:
            raise ConfigurationError(
                f"Memory size argument is invalid: '{size_arg}' (expected a whole number of cells, at least 1)",
                argument=size_arg,
            )
        self.data_type = data_type
        self.memory_size = memory_size
        logger.debug("%s configured: %s, %d cells", self.name, data_type.name, memory_size)

    def help_text(self) -> str:
        return (
            f"Generates {self.name} compatible output for a console application\n"
            "Argument 1: data type\n"
            "Argument 2: virtual memory size (number of memory cells)\n"
            "\n"
            f"Defaults: {DEFAULT_DATATYPE.name}, {DEFAULT_MEMSIZE}\n"
            "\n"
            "Available data types:\n"
            f"{', '.join(DataType.names())}"
        )

    # ===== Generation =====

    @abstractmethod
    def prologue(self) -> List[str]:
        ...

    @abstractmethod
    def epilogue(self) -> List[str]:
        ...

    def generate(self, tokens: Iterable[Token]) -> str:
        stack = BracketStack()
        lines = self.prologue()
        for token in tokens:
            lines.extend(self._to_code(token, stack))
        stack.check_empty()
        lines.extend(self.epilogue())
        return self.newline.join(lines)

    def cell_update(self, increment: bool, count: int) -> str:
        if increment:
            return self.cell_inc if count == 1 else self.cell_add.format(n=count)
        return self.cell_dec if count == 1 else self.cell_sub.format(n=count)

    def _to_code(self, token: Token, stack: BracketStack) -> List[str]:
        n = token.count
        level = self.base_indent + stack.depth
        op = token.instruction

        if op == RIGHT:
            return [indent(self.ptr_inc if n == 1 else self.ptr_add.format(n=n), level)]
        if op == LEFT:
            return [indent(self.ptr_dec if n == 1 else self.ptr_sub.format(n=n), level)]
        if op == INC:
            return [indent(self.cell_update(True, n), level)]
        if op == DEC:
            return [indent(self.cell_update(False, n), level)]
        if op == OPEN:
            out = []
            for i in range(n):
                out.append(indent(self.loop_open, self.base_indent + stack.depth))
                stack.push(token.position + i)
            return out
        if op == CLOSE:
            out = []
            for i in range(n):
                stack.pop(token.position + i)
                out.append(indent(self.loop_close, self.base_indent + stack.depth))
            return out
        if op == OUTPUT:
            return [indent(self.write_cell, level)] * n
        if op == INPUT:
            return [indent(self.read_cell, level)] * n
        if op == ZERO:
            # clearing twice is the same as clearing once
            return [indent(self.cell_zero, level)]
        raise unsupported_instruction(op, token.position, engine=self.name)
