#!/usr/bin/env python3
"""Simple example of converting SBML-style Content MathML into an AST"""

import json

from mathml_ast import MathMLError, create_parser

# Create parser
parser = create_parser(max_depth=64)

# A rate law as found in an SBML model
text = """
<math xmlns="http://www.w3.org/1998/Math/MathML"
      xmlns:sbml="http://www.sbml.org/sbml/level3/version2/core">
  <apply>
    <times/>
    <ci> k1 </ci>
    <cn sbml:units="per_second" type="e-notation"> 2e-5 </cn>
    <apply>
      <power/>
      <ci> S </ci>
      <cn type="rational"> 1 <sep/> 2 </cn>
    </apply>
    <cn type="constant"> &tau; </cn>
  </apply>
</math>
"""

# Parse the text
print("Parsing MathML...")
tree = parser.parse(text)

# Show results
print(json.dumps(tree.to_dict(), indent=2))

# Unsupported markup is rejected as a whole
try:
    parser.parse("<math><apply><plus/><mi>x</mi></apply></math>")
except MathMLError as e:
    print(f"\nRejected: {e}")
