# Services package.
#
# Each module exposes a focused set of async functions for one concern:
#
#   article_service  — validated CRUD for Article
#   comment_service  — validated CRUD for Comment
#   association      — parent existence checks and the Article -> Comment
#                      cascade delete
#
# All service functions accept an AsyncSession as their first argument
# so that the router layer controls the transaction boundary via the
# ``get_db`` dependency.
