"""Plugin module whose hook fails after registering one engine."""

from bfc.backends import CCodeGenerator


class HalfwayGenerator(CCodeGenerator):
    name = 'Halfway'
    description = 'Registered before the hook fails'


def register(registry):
    registry.register(HalfwayGenerator)
    # clashes with the built-in engine
    registry.register(CCodeGenerator)
