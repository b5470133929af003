from ._version import __version__
from .tokens import Token, ZERO, BF_SYMBOLS
from .lexer import filter_bf, optimize, tokenize
from .errors import (
    BFCError,
    CloseWithoutOpen,
    ConfigurationError,
    ErrorKind,
    GenerationFailure,
    OpenWithoutClose,
    RangeError,
    StructuralError,
    UnsupportedFeatureError,
)
from .datatypes import DataType
from .backends import CodeGenerator, CCodeGenerator, CSharpGenerator, DOSAssemblyGenerator
from .registry import EngineDescription, EngineRegistry, default_registry
from .api import CompileOptions, CompileResult, compile_file, compile_string, compile_tokens

__all__ = [
    '__version__',
    'Token',
    'ZERO',
    'BF_SYMBOLS',
    'filter_bf',
    'optimize',
    'tokenize',
    'BFCError',
    'CloseWithoutOpen',
    'ConfigurationError',
    'ErrorKind',
    'GenerationFailure',
    'OpenWithoutClose',
    'RangeError',
    'StructuralError',
    'UnsupportedFeatureError',
    'DataType',
    'CodeGenerator',
    'CCodeGenerator',
    'CSharpGenerator',
    'DOSAssemblyGenerator',
    'EngineDescription',
    'EngineRegistry',
    'default_registry',
    'CompileOptions',
    'CompileResult',
    'compile_string',
    'compile_file',
    'compile_tokens',
]
