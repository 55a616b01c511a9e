"""
CLI Module.

Command-line surface of the gateway. The CLI is a thin layer: it
translates tokens into one API call and prints the result.

Architecture:
- app.py         click entry point, global options, exit codes
- translator.py  tokens -> CallDescriptor
- registry.py    method name -> handler, dispatch
- configure.py   interactive setup wizard
- output.py      JSON rendering
"""
