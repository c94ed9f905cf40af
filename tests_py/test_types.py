from dataclasses import FrozenInstanceError

import pytest

from emitey._types import EmitConfig
from emitey._types import Line
from emitey._types import LiteralSegment
from emitey._types import NestedLine
from emitey._types import is_emission_result
from emitey._types import is_line_sequence

from emitey_testutils import make_line


class TestLine:

    def test_text_and_width(self):
        line = make_line(4, 'return ', ('a, b', ', '))

        assert line.text == 'return a, b'
        assert line.width == 15

    def test_indented(self):
        line = make_line(2, 'x')

        assert line.indented(4) == make_line(6, 'x')
        assert line.indented(0) is line

    def test_immutable(self):
        line = make_line(0, 'x')

        with pytest.raises(FrozenInstanceError):
            line.indentation = 4  # type: ignore[misc]

    def test_nested_has_no_text(self):
        line = Line(0, (NestedLine(make_line(0, 'x')),))

        with pytest.raises(TypeError):
            line.text  # noqa: B018


class TestEmitConfig:

    def test_defaults(self):
        config = EmitConfig()

        assert config.max_columns == 80
        assert config.indent_step == 4
        assert config.continuation_indent == 8
        assert config.line_terminator == '\n'
        assert config.pad_blank_lines

    @pytest.mark.parametrize(
        'kwargs',
        [
            {'max_columns': 0},
            {'indent_step': -1},
            {'continuation_indent_steps': -2},
        ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            EmitConfig(**kwargs)


class TestIsLineSequence:

    def test_positive(self):
        assert is_line_sequence([make_line(0, 'a'), make_line(0, 'b')])
        assert is_line_sequence(())

    def test_negative(self):
        assert not is_line_sequence('ab')
        assert not is_line_sequence([make_line(0, 'a'), 'b'])
        assert not is_line_sequence(make_line(0, 'a'))


class TestIsEmissionResult:

    def test_line(self):
        assert is_emission_result(Line(0, (LiteralSegment('a'),)))

    def test_str(self):
        assert not is_emission_result('a')
