"""Plugin module whose engine fails with an ordinary Python exception."""

from bfc.backends import CodeGenerator


class RaisingGenerator(CodeGenerator):
    name = 'Raising'
    description = 'Engine with a bug in generate'
    extension = 'txt'

    def help_text(self):
        return ''

    def generate(self, tokens):
        raise ValueError("plugin bug")


def register(registry):
    registry.register(RaisingGenerator)
