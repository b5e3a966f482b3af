"""
SysYC Command-Line Interface
============================

Command-line entry points:

- sysyc: SysY front end (lexer + parser with error reporting)
"""
