import pytest
from mathml_ast import create_parser, parse_document
from mathml_ast.config import MAX_DEPTH_LIMIT, ParserConfig
from mathml_ast.errors import (
    MalformedNumericLiteralError,
    MathMLError,
    MaxDepthExceededError,
    MissingRequiredAttributeError,
    UnsupportedNumericTypeError,
    UnsupportedTagError,
    XmlSyntaxError,
)
from mathml_ast.models import (
    PI,
    Apply,
    Ci,
    Cn,
    Comment,
    ComplexCartesian,
    ComplexPolar,
    Constant,
    Csymbol,
    ENotation,
    Integer,
    Op,
    Rational,
    Real,
    Root,
    Text,
    nodes_close,
)
from mathml_ast.operators import OperatorTag


class TestMathMLContentParser:

    def test_simple_parsing(self, parser, sample_mathml):
        """Test a math document with one application."""
        result = parser.parse(sample_mathml['simple'])

        assert result == Root([Apply([
            Op(OperatorTag.PLUS),
            Ci([Text('x')]),
            Ci([Text('y')]),
        ])])

    def test_compact_document(self):
        """Test the end-to-end example without whitespace."""
        result = parse_document('<math><apply><plus/><ci>x</ci><ci>y</ci></apply></math>')

        assert result == Root([Apply([Op(OperatorTag.PLUS), Ci([Text('x')]), Ci([Text('y')])])])

    def test_recursion(self, parser, sample_mathml):
        """Test nested applications in a bare SBML-style fragment."""
        result = parser.parse(sample_mathml['nested'])

        assert result == Apply([
            Op(OperatorTag.PLUS),
            Apply([
                Op(OperatorTag.TIMES),
                Ci([Text('a')]),
                Ci([Text('x')]),
            ]),
            Ci([Text('b')]),
        ])

    def test_numbers(self, parser, sample_mathml):
        """Test every cn type inside one document."""
        result = parser.parse(sample_mathml['numbers'])

        expected = Root([
            Cn(Real(12345.7)),
            Cn(Integer(12345)),
            Cn(Integer(2739), base=16),
            Cn(Rational(12342, 2342342)),
            Cn(ComplexCartesian(12.3, 5.0)),
            Cn(ComplexPolar(2.0, 3.1415)),
            Cn(Constant('$FIXED_tau')),
        ])
        assert result == expected
        assert nodes_close(result, expected)

    def test_sbml_fragment(self, parser, sample_mathml):
        """Test SBML units, e-notation and csymbol together."""
        result = parser.parse(sample_mathml['sbml'])

        assert result == Root([Apply([
            Op(OperatorTag.TIMES),
            Cn(
                ENotation(1.5, -3),
                attributes={'http://www.sbml.org/sbml/level3/version2/core:units': 'mole'}
            ),
            Ci([Text('k1')]),
            Csymbol(
                definition_url='http://www.sbml.org/sbml/symbols/time',
                encoding='text',
                children=[Text('t')]
            ),
        ])])

    @pytest.mark.parametrize('fragment, expected', [
        ('<ci> k </ci>', Ci([Text('k')])),
        ('<cn> 2 </cn>', Cn(Real(2.0))),
        ('<csymbol definitionUrl="urn:avogadro">N</csymbol>', Csymbol('urn:avogadro', children=[Text('N')])),
    ])
    def test_bare_fragments(self, parser, fragment, expected):
        """Test fragments without a math wrapper."""
        assert parser.parse(fragment) == expected

    def test_whitespace_dropped(self, parser):
        """Test whitespace-only text never reaches the children."""
        result = parser.parse('<math>\n  <apply>\n\t<minus/>   <ci>\n x \n</ci>  </apply>\n</math>')

        assert result == Root([Apply([Op(OperatorTag.MINUS), Ci([Text('x')])])])

    def test_empty_identifier(self, parser):
        """Test an empty ci has no children."""
        assert parser.parse('<ci>   </ci>') == Ci([])

    def test_operator_children_ignored(self, parser):
        """Test operator elements are leaves even with content."""
        result = parser.parse('<apply><plus><bogus/>text</plus><ci>x</ci></apply>')
        assert result == Apply([Op(OperatorTag.PLUS), Ci([Text('x')])])

    def test_namespaced_elements(self, parser):
        """Test elements are matched by local name."""
        result = parser.parse(
            '<m:math xmlns:m="http://www.w3.org/1998/Math/MathML">'
            '<m:apply><m:sin/><m:ci>x</m:ci></m:apply></m:math>'
        )
        assert result == Root([Apply([Op(OperatorTag.SIN), Ci([Text('x')])])])

    def test_comments_and_pis(self, parser):
        """Test comments and processing instructions are kept."""
        result = parser.parse('<math><!-- rate law --><?render inline?><ci>v</ci></math>')

        assert result == Root([Comment(' rate law '), PI('render', 'inline'), Ci([Text('v')])])

    def test_csymbol_alternate_spelling(self, parser):
        """Test the MathML definitionURL spelling is accepted."""
        result = parser.parse('<csymbol definitionURL="urn:time"> t </csymbol>')
        assert result == Csymbol('urn:time', children=[Text('t')])

    def test_csymbol_requires_definition_url(self, parser):
        """Test csymbol without definition URL is rejected."""
        with pytest.raises(MissingRequiredAttributeError) as exc_info:
            parser.parse('<apply><csymbol encoding="text">t</csymbol></apply>')

        assert exc_info.value.attribute == 'definitionUrl'
        assert exc_info.value.tag == 'csymbol'

    def test_unsupported_tag_anywhere(self, parser):
        """Test one unknown element rejects the whole document."""
        with pytest.raises(UnsupportedTagError) as exc_info:
            parser.parse('<math>\n<apply>\n<plus/>\n<ci>x</ci>\n<bogus/>\n</apply>\n</math>')

        assert exc_info.value.tag == 'bogus'
        assert exc_info.value.line == 5

    def test_case_sensitive_tags(self, parser):
        """Test tags differing only in case are unsupported."""
        with pytest.raises(UnsupportedTagError):
            parser.parse('<apply><Plus/><ci>x</ci></apply>')

    def test_presentation_markup_rejected(self, parser):
        """Test presentation MathML is not silently accepted."""
        with pytest.raises(UnsupportedTagError):
            parser.parse('<math><mi>x</mi></math>')

    def test_numeric_errors_propagate(self, parser):
        """Test literal errors inside a tree reject the document."""
        with pytest.raises(UnsupportedNumericTypeError):
            parser.parse('<math><apply><plus/><cn type="octonion">1</cn></apply></math>')

        with pytest.raises(MalformedNumericLiteralError):
            parser.parse('<math><cn type="integer">1.5</cn></math>')

    def test_syntax_error(self, parser):
        """Test malformed XML is reported as XmlSyntaxError."""
        with pytest.raises(XmlSyntaxError):
            parser.parse('<math><apply><plus/></math>')

    def test_unregistered_entity(self, parser):
        """Test entities outside the registry still fail to parse."""
        with pytest.raises(XmlSyntaxError):
            parser.parse('<cn type="constant"> &bla; </cn>')

    def test_declared_encoding_ignored(self):
        """Test an encoding declaration does not change decoded text."""
        result = parse_document('<?xml version="1.0" encoding="ISO-8859-1"?><ci>é</ci>')
        assert result == Ci([Text('é')])

    def test_unencodable_input(self, parser):
        """Test text with a lone surrogate is rejected as XmlSyntaxError."""
        with pytest.raises(XmlSyntaxError):
            parser.parse('<ci>\ud800</ci>')

    def test_external_entity_rejected(self, parser, temp_dir):
        """Test external entity references reject the document."""
        secret = temp_dir / 'secret.txt'
        secret.write_text('classified')

        with pytest.raises(XmlSyntaxError):
            parser.parse(
                f'<!DOCTYPE ci [<!ENTITY ext SYSTEM "{secret.as_uri()}">]>'
                '<ci>&ext;</ci>'
            )

    def test_errors_share_base_class(self, parser):
        """Test callers can catch every rejection with MathMLError."""
        for document in ['<bogus/>', '<math>', '<csymbol/>', '<cn base="x">1</cn>']:
            with pytest.raises(MathMLError):
                parser.parse(document)


class TestParserConfiguration:

    def test_max_depth(self, shallow_parser):
        """Test documents deeper than max_depth are rejected."""
        assert shallow_parser.parse('<apply><ci>x</ci></apply>') == Apply([Ci([Text('x')])])

        with pytest.raises(MaxDepthExceededError) as exc_info:
            shallow_parser.parse('<apply><apply><apply><apply><ci>x</ci></apply></apply></apply></apply>')

        assert exc_info.value.max_depth == 3

    def test_deep_document_default(self, parser):
        """Test the default limit accepts moderately deep documents."""
        depth = 50
        document = '<apply><minus/>' * depth + '<ci>x</ci>' + '</apply>' * depth

        result = parser.parse(document)
        for _ in range(depth):
            assert isinstance(result, Apply)
            result = result.children[1]
        assert result == Ci([Text('x')])

    def test_recursion_error_reported(self, monkeypatch):
        """Test interpreter stack exhaustion becomes MaxDepthExceededError."""
        parser = create_parser(max_depth=10)

        def exhausted(node, depth=0):
            raise RecursionError("maximum recursion depth exceeded")

        monkeypatch.setattr(parser, 'convert', exhausted)
        with pytest.raises(MaxDepthExceededError):
            parser.parse('<ci>x</ci>')

    def test_custom_root_tag(self):
        """Test the root tag is configurable."""
        parser = create_parser(root_tag='formula')
        result = parser.parse('<formula><ci>x</ci></formula>')

        assert result == Root([Ci([Text('x')])])

    def test_extra_entities(self):
        """Test additional entity names can be registered."""
        parser = create_parser(extra_entities=['Delta'])
        result = parser.parse('<cn type="constant">&Delta;</cn>')

        assert result == Cn(Constant('$FIXED_Delta'))

    def test_parse_document_with_config(self):
        """Test parse_document passes the configuration through."""
        with pytest.raises(MaxDepthExceededError):
            parse_document('<apply><apply><ci>x</ci></apply></apply>', ParserConfig(max_depth=1))

    def test_deepest_allowed_limit(self):
        """Test the largest accepted max_depth is honoured without stack exhaustion."""
        parser = create_parser(max_depth=MAX_DEPTH_LIMIT)
        depth = MAX_DEPTH_LIMIT - 1
        document = '<apply><minus/>' * depth + '<ci>x</ci>' + '</apply>' * depth

        result = parser.parse(document)
        for _ in range(depth):
            result = result.children[1]
        assert result == Ci([Text('x')])

        deeper = '<apply><minus/>' + document + '</apply>'
        with pytest.raises(MaxDepthExceededError) as exc_info:
            parser.parse(deeper)
        assert exc_info.value.max_depth == MAX_DEPTH_LIMIT
