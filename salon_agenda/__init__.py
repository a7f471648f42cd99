"""Motor de disponibilidade e agenda do salão."""

__version__ = "1.0.0"
