"""
Interface package: protocol front-ends for the move chooser.

Modules:
    uci        — Universal Chess Interface (UCI) handler over stdin/stdout.
                 Run as: python -m interface.uci
    mcp_server — Model Context Protocol server exposing make_chess_move.
                 Run as: python -m interface.mcp_server
"""
