"""Credit Trends — tax credit utilization analytics."""
__version__ = "1.0.0"
