from .base import Base
from .restaurant import Restaurant
from .menu_item import MenuItem
