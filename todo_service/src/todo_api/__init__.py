"""
Todo Service package.

A FastAPI application exposing CRUD routes for a todo list stored in a
single relational table. Build the app with `todo_api.main.create_app`.
"""
