from .repository import TableRepository
from .dispatcher import QueryDispatcher
from .engine import AccessFilter, Role
