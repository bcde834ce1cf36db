"""Service Maker -- Laravel interface/repository/service/trait generator."""

__version__ = "0.1.0"
