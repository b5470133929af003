from .base import BracketStack, CodeGenerator, LoopMarker, expand_zero
from .c99 import CCodeGenerator
from .csharp import CSharpGenerator
from .dos import DOSAssemblyGenerator
from .structured import StructuredGenerator

BUILTIN_ENGINES = (CCodeGenerator, CSharpGenerator, DOSAssemblyGenerator)

__all__ = [
    'BracketStack',
    'CodeGenerator',
    'LoopMarker',
    'expand_zero',
    'StructuredGenerator',
    'CCodeGenerator',
    'CSharpGenerator',
    'DOSAssemblyGenerator',
    'BUILTIN_ENGINES',
]
