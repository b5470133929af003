from __future__ import annotations

import logging

from typing import Iterable, List

import numpy as np

from ..errors import repeated_too_often, unsupported_instruction
from ..tokens import CLOSE, DEC, INC, INPUT, LEFT, OPEN, OUTPUT, RIGHT, ZERO, Token
from .base import BracketStack, CodeGenerator


logger = logging.getLogger(__name__)

# DOS single segment memory layout
# --------------------------------
# A .com program gets one 64 KiB page (0x0000-0xFFFF). DOS fills the first
# 0x100 bytes with the program segment prefix and loads the code at 0x100.
# Free memory starts right after the code and runs up to the stack at the
# top of the page, so code, BF memory and stack share one address space:
#   - available BF memory = page size - header - compiled code size - stack
#   - writing close to the end of the page clobbers the stack
#   - the code itself is not protected from the BF program
#
# BF never touches the stack. Cells are 8 bits and wrap; the pointer (bp)
# does not. The generated program does not stop on CTRL+C, CTRL+Z or end of
# input.

CELL = np.dtype(np.uint8)
ADDRESS = np.dtype(np.uint16)

CELL_MODULUS = 1 << np.iinfo(CELL).bits
MAX_DISPLACEMENT = int(np.iinfo(ADDRESS).max)

COMMENT_COLUMN = 30


def with_comment(instruction: str, comment: str, depth: int) -> str:
    return instruction.ljust(COMMENT_COLUMN) + ';' + ' ' * (depth * 4) + comment


class DOSAssemblyGenerator(CodeGenerator):
    """x86 real mode assembly (FASM syntax) for a single segment DOS .com file."""

    name = 'DOS'
    description = 'DOS single segment assembly generator'
    extension = 'asm'

    newline = '\r\n'

    def help_text(self) -> str:
        return (
            "Generates real mode single page DOS assembly code (for .com file)\n"
            "This generator has no custom arguments.\n"
            "Memory cell size is always 8 bits.\n"
            "The number of bytes depends on the size of the source code.\n"
            "A single page is 65536 (0x10000) bytes long.\n"
            "\n"
            "Subtracting the size of the *compiled* assembly code\n"
            "and the 0x100 long header will return the available memory.\n"
            "\n"
            "The output is compatible with the flat assembler (FASM)."
        )

    def generate(self, tokens: Iterable[Token]) -> str:
        stack = BracketStack()
        lines = self._prologue()
        for token in tokens:
            lines.extend(self._to_code(token, stack))
        stack.check_empty()
        lines.extend(self._epilogue())
        logger.debug("DOS: %d labels", stack.next_label)
        return self.newline.join(lines)

    def _prologue(self) -> List[str]:
        return [
            ';Generated for FASM',
            'org 0100h',
            '; Zero all unused memory (from .mem upwards)',
            'mov bp,.mem',
            '.clear:',
            'mov [bp],byte 0',
            'inc bp',
            with_comment('jz .run', 'Exit the loop once the counter overflows', 0),
            'jmp .clear',
            '.run:',
            with_comment('mov bp,.mem', 'Initial memory location (ptr=0)', 0),
        ]

    def _epilogue(self) -> List[str]:
        return [
            ';DOS Exit call',
            'mov ah,4Ch',
            with_comment('mov al,byte [bp]', 'return mem[ptr];', 0),
            'int 21h',
            '; == Utility functions ==',
            '',
            ';Write a single character to STDOUT',
            '.putchar:',
            'mov dl,[bp]',
            'mov ah,02h',
            'int 21h',
            'ret',
            '',
            ';Read a single character from STDIN',
            '.getchar:',
            'mov ah,01h',
            'int 21h',
            'mov [bp],al',
            'ret',
            '',
            '; == Start of memory ==',
            '',
            '.mem:',
            f'db "Compiled by {self.description} {self.version}"',
        ]

    def _to_code(self, token: Token, stack: BracketStack) -> List[str]:
        n = token.count
        op = token.instruction
        depth = stack.depth

        if op in (RIGHT, LEFT):
            if n > MAX_DISPLACEMENT:
                raise repeated_too_often(op, n, MAX_DISPLACEMENT, token.position)
            if op == RIGHT:
                return [with_comment('inc bp', '++ptr;', depth) if n == 1 else
                        with_comment(f'add bp,{n}', f'ptr+={n};', depth)]
            return [with_comment('dec bp', '--ptr;', depth) if n == 1 else
                    with_comment(f'sub bp,{n}', f'ptr-={n};', depth)]

        if op in (INC, DEC):
            # the immediate wraps exactly like the cell does
            imm = n % CELL_MODULUS
            if op == INC:
                return [with_comment('inc byte [bp]', '++mem[ptr];', depth) if imm == 1 else
                        with_comment(f'add [bp], byte {imm}', f'mem[ptr]+={n};', depth)]
            return [with_comment('dec byte [bp]', '--mem[ptr];', depth) if imm == 1 else
                    with_comment(f'sub [bp], byte {imm}', f'mem[ptr]-={n};', depth)]

        if op == OPEN:
            out: List[str] = []
            for i in range(n):
                label = stack.push(token.position + i).label
                if i == 0:
                    out.extend([
                        '',
                        'mov al,byte [bp]',
                        'test al,al',
                        with_comment(f'jz .e{label}', 'while(mem[ptr]){', stack.depth - 1),
                        f'.s{label}:',
                    ])
                else:
                    # only reachable by falling through the header above
                    out.append(with_comment(f'.s{label}:', 'while(mem[ptr]){', stack.depth - 1))
            return out

        if op == CLOSE:
            out = []
            for i in range(n):
                label = stack.pop(token.position + i).label
                if i == 0:
                    out.extend([
                        '',
                        'mov al,byte [bp]',
                        'test al,al',
                        with_comment(f'jnz .s{label}', '}', stack.depth),
                        f'.e{label}:',
                    ])
                else:
                    # the cell is known to be zero here
                    out.append(with_comment(f'.e{label}:', '}', stack.depth))
            return out

        if op == OUTPUT:
            return [with_comment('call .putchar', 'putchar(mem[ptr]);', depth)] * n
        if op == INPUT:
            return [with_comment('call .getchar', 'mem[ptr]=getchar();', depth)] * n
        if op == ZERO:
            return [with_comment('mov [bp],byte 0', 'mem[ptr]=0; //Original: [-]', depth)]

        raise unsupported_instruction(op, token.position, engine=self.name)
