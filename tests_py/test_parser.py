import pytest

from emitey._types import BreakableSegment
from emitey._types import Line
from emitey._types import LiteralSegment
from emitey._types import NestedLine
from emitey._types import NestedLines
from emitey.exceptions import ArityMismatch
from emitey.exceptions import InvalidSeparatorSupplier
from emitey.exceptions import MalformedTemplate
from emitey.parser import FormFlavor
from emitey.parser import InterpolatedPlaceholder
from emitey.parser import bind_form
from emitey.parser import coerce_value
from emitey.parser import parse
from emitey.parser import prepare_form
from emitey.separators import Separators


class TestParse:

    def test_plain_string(self):
        parsed = parse('foo')

        assert parsed.indentation == 0
        assert parsed.parts == ('foo',)
        assert parsed.placeholder_count == 0

    def test_indentation_stripped_from_first_literal(self):
        parsed = parse('    def ~a(~a):')

        assert parsed.indentation == 4
        assert parsed.parts == (
            'def ',
            InterpolatedPlaceholder(part_index=1, placeholder_index=0),
            '(',
            InterpolatedPlaceholder(part_index=3, placeholder_index=1),
            '):')
        assert parsed.placeholder_count == 2

    def test_only_placeholder(self):
        parsed = parse('~a')

        assert parsed.indentation == 0
        assert parsed.parts == (
            InterpolatedPlaceholder(part_index=0, placeholder_index=0),)

    def test_uppercase_placeholder(self):
        parsed = parse('~A')
        assert parsed.placeholder_count == 1

    def test_escaped_tilde(self):
        """A doubled tilde must become a literal tilde, and must not be
        mistaken for the start of a placeholder.
        """
        parsed = parse('~~a ~a')

        assert parsed.parts == (
            '~a ',
            InterpolatedPlaceholder(part_index=1, placeholder_index=0))
        assert parsed.placeholder_count == 1

    def test_whitespace_only(self):
        parsed = parse('   ')

        assert parsed.indentation == 3
        assert parsed.parts == ()

    def test_empty(self):
        parsed = parse('')

        assert parsed.indentation == 0
        assert parsed.parts == ()
        assert parsed.placeholder_count == 0

    def test_inner_whitespace_preserved(self):
        """Only the leading run of spaces counts as indentation."""
        parsed = parse('  a  ~a  ')

        assert parsed.indentation == 2
        assert parsed.parts == (
            'a  ',
            InterpolatedPlaceholder(part_index=1, placeholder_index=0),
            '  ')

    @pytest.mark.parametrize('template', ['~x', 'foo ~', '~ a'])
    def test_malformed(self, template):
        with pytest.raises(MalformedTemplate):
            parse(template)


class TestPrepareForm:

    def test_regular(self):
        form = prepare_form('~a = ~a', ['x', 1])

        assert form.flavor is FormFlavor.REGULAR
        assert form.values == ('x', 1)
        assert form.separators is None

    def test_no_placeholders(self):
        form = prepare_form('pass', [])

        assert form.flavor is FormFlavor.REGULAR
        assert form.values == ()

    def test_break_line(self):
        """Exactly twice as many arguments as placeholders must select
        the break-line form, pairing every value with its separators.
        """
        form = prepare_form(
            'f(~a) + ~a', ['a, b', Separators(', '), 'c', ' '])

        assert form.flavor is FormFlavor.BREAK_LINE
        assert form.values == ('a, b', 'c')
        assert form.separators == ((', ',), (' ',))

    def test_callable_supplier(self):
        form = prepare_form('~a', ['a b', lambda: [' and ', ' ']])
        assert form.separators == ((' and ', ' '),)

    @pytest.mark.parametrize(
        'template,args',
        [
            ('~a', []),
            ('~a ~a', ['a', 'b', 'c']),
            ('pass', ['a']),
            ('~a ~a', ['a', 'b', 'c', 'd', 'e']),
        ])
    def test_arity_mismatch(self, template, args):
        with pytest.raises(ArityMismatch):
            prepare_form(template, args)

    @pytest.mark.parametrize(
        'supplier',
        [5, None, '', lambda: 5, lambda: [''], lambda: [', ', 7]])
    def test_invalid_supplier(self, supplier):
        with pytest.raises(InvalidSeparatorSupplier):
            prepare_form('~a', ['a, b', supplier])

    def test_supplier_called_eagerly(self):
        calls = []

        def supplier():
            calls.append(True)
            return [', ']

        prepare_form('~a', ['a, b', supplier])
        assert calls == [True]

    def test_non_string_template(self):
        with pytest.raises(TypeError):
            prepare_form(42, [])  # type: ignore[arg-type]


class TestBindForm:

    def test_regular(self):
        form = prepare_form('  int ~a = ~a;', ['x', 42])
        line = bind_form(form, form.values)

        assert line == Line(2, (
            LiteralSegment('int '),
            LiteralSegment('x'),
            LiteralSegment(' = '),
            LiteralSegment('42'),
            LiteralSegment(';')))

    def test_none_contributes_nothing(self):
        form = prepare_form('~a', [None])
        line = bind_form(form, form.values)

        assert line == Line(0, ())

    def test_break_line(self):
        form = prepare_form('f(~a)', ['a, b', Separators(', ', ' ')])
        line = bind_form(form, form.values)

        assert line.segments == (
            LiteralSegment('f('),
            BreakableSegment('a, b', (', ', ' ')),
            LiteralSegment(')'))

    def test_nested_values(self):
        """Lines and sequences of lines must be embedded as nested
        content, not stringified.
        """
        nested = Line(0, (LiteralSegment('a'),))
        block = [Line(4, (LiteralSegment('b'),))]
        form = prepare_form('~a~a', [nested, block])
        line = bind_form(form, form.values)

        assert line.segments == (
            NestedLine(nested),
            NestedLines(tuple(block)))

    def test_evaluated_values_used(self):
        """The values passed to bind_form must win over the ones stored
        on the form, since those may still be deferred.
        """
        form = prepare_form('~a', [object()])
        line = bind_form(form, ['evaluated'])

        assert line.text == 'evaluated'


class TestCoerceValue:

    def test_empty_string(self):
        assert coerce_value('') is None

    def test_other_objects_stringified(self):
        assert coerce_value(3.5) == LiteralSegment('3.5')

    def test_nested_ignores_separators(self):
        nested = Line(0, (LiteralSegment('a'),))
        assert coerce_value(nested, (', ',)) == NestedLine(nested)

    def test_empty_sequence_is_empty_block(self):
        assert coerce_value([]) == NestedLines(())
