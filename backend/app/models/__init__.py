# Importing the models registers them with Base.metadata
from app.models.user import User
from app.models.product import Product
from app.models.favorite import Favorite

__all__ = ["User", "Product", "Favorite"]
