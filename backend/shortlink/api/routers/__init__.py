"""
FastAPI routers, one module per resource.
The redirect router holds the catch-all /{alias} route and is mounted last.
"""
