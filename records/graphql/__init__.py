"""
GraphQL __init__ for records graphql module
"""
from .schema import schema

__all__ = ['schema']
