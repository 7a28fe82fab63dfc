"""Procedure routers, one per resource."""
