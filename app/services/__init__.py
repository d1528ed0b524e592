"""서비스 패키지 — 비즈니스 로직 계층.

Service package — Business logic layer.
Product, category and user profile services enforce uniqueness rules,
update policies and timestamps, and call repositories for DB operations.
"""
