"""Simulation of water sharing between regions through acequia canals."""

__version__ = "0.1.0"

__all__ = ["__version__"]