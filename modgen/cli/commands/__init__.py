"""
MODGEN CLI Commands - Modular Structure
"""

from modgen.cli.commands.generate_command import generate
from modgen.cli.commands.undo_command import undo

__all__ = [
    "generate",
    "undo",
]
