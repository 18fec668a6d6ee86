from .factories import CardFactory, ParametersFactory

__all__ = ["CardFactory", "ParametersFactory"]
