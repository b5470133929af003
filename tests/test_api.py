#!/usr/bin/env python3
"""
High level compile API: typed results instead of exceptions.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))
sys.path.append(os.path.dirname(__file__))

from bfc.api import CompileOptions, compile_file, compile_string, compile_tokens, prepare_tokens
from bfc.backends import CCodeGenerator, DOSAssemblyGenerator
from bfc.errors import CloseWithoutOpen, ErrorKind, GenerationFailure, OpenWithoutClose
from bfc.registry import default_registry
from fake_engine import SilentGenerator
from raising_engine import RaisingGenerator


HELLO = "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]>>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."


def test_compile_string_by_name():
    for name in ('c99', 'C#', 'dos'):
        result = compile_string(HELLO, name)
        assert result.ok
        assert result.error is None
        assert result.error_kind is None
        assert result.code


def test_compile_string_with_instance():
    result = compile_string("+[-]", CCodeGenerator())
    assert result.ok
    assert 'while(mem[ptr]!=0){' in result.code


def test_optimize_option():
    result = compile_string("+[-]", 'C99', options=CompileOptions(optimize=True))
    assert result.ok
    assert 'while' not in result.code
    assert '\tmem[ptr]=0;' in result.code.split('\r\n')


def test_engine_arguments_applied():
    result = compile_string("+", 'C99', options=CompileOptions(engine_arguments=('UInt64', '8')))
    assert result.ok
    assert '\tuint64_t mem[8]={0};' in result.code.split('\r\n')


def test_configuration_error_result():
    result = compile_string("+", 'C99', options=CompileOptions(engine_arguments=('Byte',)))
    assert not result.ok
    assert result.error_kind is ErrorKind.CONFIGURATION
    result = compile_string("+", 'DOS', options=CompileOptions(engine_arguments=('x',)))
    assert result.error_kind is ErrorKind.CONFIGURATION
    assert result.error.argument == 'x'


def test_unknown_engine():
    result = compile_string("+", 'pascal')
    assert result.error_kind is ErrorKind.CONFIGURATION
    assert 'pascal' in str(result.error)


def test_structural_errors_have_context():
    result = compile_string("+++ comment ]", 'C99')
    assert result.error_kind is ErrorKind.STRUCTURAL
    assert isinstance(result.error, CloseWithoutOpen)
    assert result.code is None
    assert result.error.position == 3
    # excerpt of the filtered program with a caret under the bracket
    assert result.error.context == "  +++]\n     ^"
    assert 'Hint:' in str(result.error)

    result = compile_string("[", 'DOS')
    assert isinstance(result.error, OpenWithoutClose)
    assert result.error.context == "  [\n  ^"


def test_context_uses_optimized_positions():
    result = compile_string("[-]]", 'C99', options=CompileOptions(optimize=True))
    assert result.error.position == 1
    assert result.error.context == "  !]\n   ^"


def test_range_error_result():
    result = compile_string(">" * 0x10000, 'DOS')
    assert result.error_kind is ErrorKind.RANGE
    assert result.error.position == 0


def test_none_output_is_generation_failure():
    result = compile_tokens(SilentGenerator(), prepare_tokens("+."))
    assert not result.ok
    assert result.error_kind is ErrorKind.GENERATION_FAILURE
    assert isinstance(result.error, GenerationFailure)
    assert result.error.engine == 'Silent'


def test_generation_failure_distinct_from_raised_errors():
    raised = compile_tokens(DOSAssemblyGenerator(), prepare_tokens("]"))
    silent = compile_tokens(SilentGenerator(), prepare_tokens("]"))
    assert raised.error_kind is ErrorKind.STRUCTURAL
    assert silent.error_kind is ErrorKind.GENERATION_FAILURE


def test_custom_registry():
    registry = default_registry()
    registry.load_module('fake_engine')
    result = compile_string("+", 'fake', registry=registry)
    assert result.code == 'init\nadd 1\nexit'


def test_compile_file(tmp_path):
    src = tmp_path / 'hello.bf'
    src.write_text(HELLO + "\n", encoding='utf-8')
    result = compile_file(src, 'C99')
    assert result.ok
    assert result.code == compile_string(HELLO, 'C99').code


def test_engine_exception_is_generation_failure():
    result = compile_string("+", RaisingGenerator())
    assert not result.ok
    assert result.error_kind is ErrorKind.GENERATION_FAILURE
    assert result.error.engine == 'Raising'
    assert isinstance(result.error.__cause__, ValueError)
    assert 'ValueError: plugin bug' in str(result.error)


def test_compile_file_across_lines(tmp_path):
    src = tmp_path / 'lines.bf'
    src.write_text("+\n+ two\n[-]\n.", encoding='utf-8')
    result = compile_file(src, 'C99', options=CompileOptions(optimize=True))
    assert result.ok
    assert result.code == compile_string("++[-].", 'C99', options=CompileOptions(optimize=True)).code


def test_compile_file_error_context(tmp_path):
    src = tmp_path / 'bad.bf'
    src.write_text("+\n+\n]\n", encoding='utf-8')
    result = compile_file(src, 'DOS')
    assert isinstance(result.error, CloseWithoutOpen)
    assert result.error.position == 2
    assert result.error.context == "  ++]\n    ^"


def test_prepare_tokens_from_file_handle(tmp_path):
    src = tmp_path / 'split.bf'
    # the clear loop is split over two lines
    src.write_text("+[\n-]>\n>", encoding='utf-8')
    with open(src, encoding='utf-8') as f:
        tokens = [(t.instruction, t.count, t.position) for t in prepare_tokens(f, optimize_code=True)]
    assert tokens == [('+', 1, 0), ('!', 1, 1), ('>', 2, 2)]
