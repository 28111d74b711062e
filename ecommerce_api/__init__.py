"""
E-commerce REST API: catalog, orders with stock reservation, reviews and analytics
"""
__version__ = "1.0.0"
