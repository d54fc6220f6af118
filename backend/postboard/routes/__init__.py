"""
PostBoard Backend - API Routes Package
=======================================

Route Inventory:
    - users.py:     POST /users/signup, PUT /users/{id},
                    GET /users/by-email, GET /users/{id}
    - posts.py:     POST /posts, DELETE /posts/{id}, GET /posts/details,
                    GET /posts/comment-count, GET /posts/{id}
    - comments.py:  POST /comments, PATCH /comments/{id},
                    POST /comments/find-or-create, GET /comments/search,
                    GET /comments/newest/{postId}, GET /comments/details/{id}
    - health.py:    GET /health

Routes are thin: extract request data, call a service, return its schema.
Errors are raised as exceptions and rendered by the handlers in main.py.
"""
