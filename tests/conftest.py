import pytest
import tempfile
from pathlib import Path
from mathml_ast.config import ParserConfig
from mathml_ast.numeric import NumericLiteralDecoder
from mathml_ast.parser import MathMLContentParser
from mathml_ast.sanitizer import EntitySanitizer
from mathml_ast.xml_tree import parse_xml


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def parser():
    """Parser with default configuration."""
    return MathMLContentParser()


@pytest.fixture
def shallow_parser():
    """Parser that only accepts very shallow documents."""
    return MathMLContentParser(ParserConfig(max_depth=3))


@pytest.fixture
def number_decoder():
    """Numeric literal decoder instance."""
    return NumericLiteralDecoder()


@pytest.fixture
def sanitizer():
    """Sanitizer with the default entity registry."""
    return EntitySanitizer()


@pytest.fixture
def element():
    """Return a factory turning an XML snippet into its element node."""
    def make(xml: str):
        return parse_xml(xml).document_element()
    return make


@pytest.fixture
def sample_mathml():
    """Sample Content MathML for testing."""
    return {
        'simple': '''<math xmlns="http://www.w3.org/1998/Math/MathML">
                            <apply>
                          <plus/>
                      <ci> x </ci>
                      <ci> y </ci>
                    </apply></math>''',
        'nested': '''<apply>
                      <plus/>
                      <apply>
                        <times/>
                        <ci> a </ci>
                        <ci> x </ci>
                      </apply>
                      <ci> b </ci>
                    </apply>''',
        'numbers': '''
        <math xmlns="http://www.w3.org/1998/Math/MathML">
        <cn type="real"> 12345.7 </cn>
                    <cn type="integer"> 12345 </cn>
                    <cn type="integer" base="16"> AB3 </cn>
                    <cn type="rational"> 12342 <sep/> 2342342 </cn>
                    <cn type="complex-cartesian"> 12.3 <sep/> 5 </cn>
                    <cn type="complex-polar"> 2 <sep/> 3.1415 </cn>
                    <cn type="constant">  &tau; </cn>
                    </math>
                    ''',
        'sbml': '''<math xmlns="http://www.w3.org/1998/Math/MathML"
                         xmlns:sbml="http://www.sbml.org/sbml/level3/version2/core">
                     <apply>
                       <times/>
                       <cn sbml:units="mole" type="e-notation"> 1.5e-3 </cn>
                       <ci> k1 </ci>
                       <csymbol encoding="text"
                                definitionURL="http://www.sbml.org/sbml/symbols/time"> t </csymbol>
                     </apply>
                   </math>'''
    }
