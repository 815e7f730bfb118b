# Services package init
"""
Shopfront Backend: Services Layer
==================================

What:  Repository access sitting between routes (HTTP) and the database.
How:   Each service is a stateless class with a module-level singleton.
       Methods take the request's AsyncSession and return ORM objects.

Service Inventory:
    - ProductService:  list / list by category / get (owner expansion) /
                       create / update / delete
    - FavoriteService: list (product + owner expansion) / get / create / delete
    - UserService:     lookup by bearer token

Services do not raise HTTP-level errors; a missing row is returned as None
and the route applies `app.guards.handle_404`.
"""
