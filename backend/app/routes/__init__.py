# Routes package init
"""
Shopfront Backend: API Routes Package
======================================

Route Inventory:
    - products.py:   GET    /products
                     GET    /products/category/{category}
                     GET    /products/{id}
                     POST   /products
                     PATCH  /products/{id}
                     DELETE /products/{id}
    - favorites.py:  GET    /favorites
                     POST   /favorites
                     DELETE /favorites/{id}
    - health.py:     GET    /health

Routes stay thin: extract path/body, call one service method, apply the
guards from `app.guards`, build the response envelope.
"""
