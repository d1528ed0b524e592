"""레포지토리 패키지 — 데이터베이스 쿼리 계층.

Repository package — Database query layer.
Contains the category, product and user profile repositories. Each extends
BaseRepository for generic CRUD and adds its named queries.
"""
