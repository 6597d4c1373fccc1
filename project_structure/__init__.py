"""
ProjectStructure: function, tRPC procedure and type signatures of TypeScript/JavaScript projects.
"""

__version__ = "0.1.0"
