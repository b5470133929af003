"""Example external engine, loaded by the registry tests as a plugin module.

Produces a made-up assembly dialect. It has no native "clear cell"
statement, so zero instructions are expanded back into ``[-]`` loops.
"""

from bfc.backends import BracketStack, CodeGenerator, expand_zero


class FakeAssemblyGenerator(CodeGenerator):
    name = 'Fake'
    description = 'Fake BF assembly for plugin tests'
    extension = '.fasm.'

    def help_text(self):
        return "Fake engine, no arguments"

    def generate(self, tokens):
        stack = BracketStack()
        lines = ['init']
        for t in expand_zero(tokens):
            if t.instruction == '.':
                lines.extend(['  ' * stack.depth + 'put'] * t.count)
            elif t.instruction == ',':
                lines.extend(['  ' * stack.depth + 'get'] * t.count)
            elif t.instruction == '+':
                lines.append('  ' * stack.depth + f'add {t.count}')
            elif t.instruction == '-':
                lines.append('  ' * stack.depth + f'sub {t.count}')
            elif t.instruction == '>':
                lines.append('  ' * stack.depth + f'shr {t.count}')
            elif t.instruction == '<':
                lines.append('  ' * stack.depth + f'shl {t.count}')
            elif t.instruction == '[':
                for i in range(t.count):
                    lines.append('  ' * stack.depth + 'loop')
                    stack.push(t.position + i)
            elif t.instruction == ']':
                for i in range(t.count):
                    stack.pop(t.position + i)
                    lines.append('  ' * stack.depth + 'retl')
        stack.check_empty()
        lines.append('exit')
        return '\n'.join(lines)


class SilentGenerator(CodeGenerator):
    """Returns nothing without raising."""

    name = 'Silent'
    description = 'Engine that never produces output'
    extension = 'txt'

    def help_text(self):
        return ''

    def generate(self, tokens):
        for _ in tokens:
            pass
        return None


def register(registry):
    registry.register(FakeAssemblyGenerator)
    registry.register(SilentGenerator)
