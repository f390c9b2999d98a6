"""GraphQL schema for courses, students and grades"""
import strawberry

from .queries import RecordsQuery
from .mutations import RecordsMutation

schema = strawberry.Schema(
    query=RecordsQuery,
    mutation=RecordsMutation
)
