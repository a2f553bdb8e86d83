"""Shape Bridge — Discord relay for Shapes conversational AI."""

__version__ = "0.1.0"
