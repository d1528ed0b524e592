"""상품 CRUD API 테스트.

Product CRUD API tests — Create, Read, Update, Delete and search endpoints.
Covers SKU uniqueness, full-overwrite updates, pagination and filters.
"""

from httpx import AsyncClient

URL = "/api/products"


def _payload(**overrides) -> dict:
    body = {
        "name": "Mechanical Keyboard",
        "description": "Brown switches",
        "price": "89.90",
        "stock_quantity": 5,
        "brand": "Keychron",
        "image_url": "http://img.example.com/kb.png",
        "sku": "KB-100",
        "active": True,
    }
    body.update(overrides)
    return body


class TestProductCreate:
    """상품 생성 테스트."""

    async def test_create_product(self, client: AsyncClient, category):
        """상품 생성 성공 — ID와 타임스탬프가 부여됨."""
        res = await client.post(URL, json=_payload(category_id=category.id))
        assert res.status_code == 201
        data = res.json()
        assert data["id"] > 0
        assert data["sku"] == "KB-100"
        assert data["price"] == "89.90"
        assert data["category_id"] == category.id
        assert data["created_at"] is not None
        assert data["updated_at"] is not None

    async def test_create_product_without_category(self, client: AsyncClient):
        """분류 없이 상품 생성."""
        res = await client.post(URL, json=_payload())
        assert res.status_code == 201
        assert res.json()["category_id"] is None

    async def test_create_duplicate_sku(self, client: AsyncClient, product):
        """중복 SKU로 생성 시 409."""
        res = await client.post(URL, json=_payload(sku=product.sku))
        assert res.status_code == 409
        assert product.sku in res.json()["detail"]

    async def test_create_unknown_category(self, client: AsyncClient):
        """존재하지 않는 분류 참조 시 404."""
        res = await client.post(URL, json=_payload(category_id=9999))
        assert res.status_code == 404

    async def test_create_missing_required_fields(self, client: AsyncClient):
        """필수 필드 누락 시 422 — 필드별 위반 목록 반환."""
        res = await client.post(URL, json={"description": "no name"})
        assert res.status_code == 422
        fields = {v["field"] for v in res.json()["detail"]}
        assert {"name", "price", "sku"} <= fields

    async def test_create_negative_price(self, client: AsyncClient):
        """음수 가격은 거부됨."""
        res = await client.post(URL, json=_payload(price="-1.00"))
        assert res.status_code == 422
        assert res.json()["detail"][0]["field"] == "price"

    async def test_create_price_too_many_decimals(self, client: AsyncClient):
        """소수점 3자리 가격은 거부됨."""
        res = await client.post(URL, json=_payload(price="1.234"))
        assert res.status_code == 422


class TestProductRead:
    """상품 조회 테스트."""

    async def test_get_product(self, client: AsyncClient, product):
        """ID로 상품 조회."""
        res = await client.get(f"{URL}/{product.id}")
        assert res.status_code == 200
        data = res.json()
        assert data["name"] == "Wireless Mouse"
        assert data["price"] == "19.99"

    async def test_get_nonexistent_product(self, client: AsyncClient):
        """존재하지 않는 상품 조회 시 404."""
        res = await client.get(f"{URL}/9999")
        assert res.status_code == 404

    async def test_list_products(self, client: AsyncClient, product):
        """전체 상품 목록 조회."""
        res = await client.get(URL)
        assert res.status_code == 200
        data = res.json()
        assert isinstance(data, list)
        assert [p["sku"] for p in data] == ["WM-001"]

    async def test_get_by_sku(self, client: AsyncClient, product):
        """SKU로 조회, 없으면 404."""
        res = await client.get(f"{URL}/sku/WM-001")
        assert res.status_code == 200
        assert res.json()["id"] == product.id

        res2 = await client.get(f"{URL}/sku/NOPE")
        assert res2.status_code == 404

    async def test_get_by_category(self, client: AsyncClient, product, category):
        """분류별 상품 조회."""
        res = await client.get(f"{URL}/category/{category.id}")
        assert res.status_code == 200
        assert [p["id"] for p in res.json()] == [product.id]

    async def test_get_by_brand(self, client: AsyncClient, product):
        """브랜드별 상품 조회 — 완전 일치."""
        res = await client.get(f"{URL}/brand/Logi")
        assert len(res.json()) == 1

        res2 = await client.get(f"{URL}/brand/Log")
        assert res2.json() == []

    async def test_search_case_insensitive(self, client: AsyncClient, product):
        """상품명 검색은 대소문자를 구분하지 않음."""
        res = await client.get(f"{URL}/search", params={"name": "MOUSE"})
        assert res.status_code == 200
        assert [p["id"] for p in res.json()] == [product.id]

    async def test_search_wildcard_is_literal(self, client: AsyncClient, product):
        """검색어의 % 문자는 와일드카드로 취급되지 않음."""
        res = await client.get(f"{URL}/search", params={"name": "%"})
        assert res.json() == []

    async def test_active_products_and_count(self, client: AsyncClient, product):
        """활성 상품 목록과 개수."""
        await client.post(URL, json=_payload(sku="KB-OFF", active=False))

        res = await client.get(f"{URL}/active")
        assert [p["sku"] for p in res.json()] == ["WM-001"]

        res2 = await client.get(f"{URL}/count/active")
        assert res2.json() == 1

    async def test_price_range_inclusive(self, client: AsyncClient, product):
        """가격 범위 조회 — 양끝 포함."""
        await client.post(URL, json=_payload(sku="KB-1", price="50.00"))

        res = await client.get(f"{URL}/price-range", params={"min_price": "19.99", "max_price": "50.00"})
        assert res.status_code == 200
        assert len(res.json()) == 2

        res2 = await client.get(f"{URL}/price-range", params={"min_price": "20", "max_price": "49.99"})
        assert res2.json() == []

    async def test_price_range_inverted(self, client: AsyncClient):
        """최소가 최대보다 크면 422."""
        res = await client.get(f"{URL}/price-range", params={"min_price": "10", "max_price": "5"})
        assert res.status_code == 422

    async def test_exists(self, client: AsyncClient, product):
        """존재 여부 확인."""
        assert (await client.get(f"{URL}/exists/{product.id}")).json() is True
        assert (await client.get(f"{URL}/exists/9999")).json() is False

    async def test_health(self, client: AsyncClient):
        """서비스 상태 확인 — 일반 텍스트."""
        res = await client.get(f"{URL}/health")
        assert res.status_code == 200
        assert res.text == "Product Service is running"


class TestProductPagination:
    """상품 페이지네이션 테스트."""

    async def test_page_with_total_header(self, client: AsyncClient):
        """페이지 조회 시 X-Total-Count 헤더와 메타데이터 반환."""
        for i in range(5):
            await client.post(URL, json=_payload(sku=f"SKU-{i}", name=f"Item {i}"))

        res = await client.get(f"{URL}/page", params={"page": 2, "per_page": 2})
        assert res.status_code == 200
        assert res.headers["X-Total-Count"] == "5"
        data = res.json()
        assert data["total"] == 5
        assert data["page"] == 2
        assert data["per_page"] == 2
        assert data["pages"] == 3
        assert [p["name"] for p in data["items"]] == ["Item 2", "Item 3"]

    async def test_page_sorted_desc(self, client: AsyncClient):
        """정렬 방향 지정 — 가격 내림차순."""
        await client.post(URL, json=_payload(sku="A", price="1.00"))
        await client.post(URL, json=_payload(sku="B", price="3.00"))
        await client.post(URL, json=_payload(sku="C", price="2.00"))

        res = await client.get(f"{URL}/page", params={"sort": "price,desc"})
        assert [p["sku"] for p in res.json()["items"]] == ["B", "C", "A"]

    async def test_page_beyond_last(self, client: AsyncClient, product):
        """마지막 페이지 이후는 빈 목록."""
        res = await client.get(f"{URL}/page", params={"page": 5})
        data = res.json()
        assert data["items"] == []
        assert data["total"] == 1

    async def test_page_invalid_sort_field(self, client: AsyncClient):
        """허용되지 않은 정렬 필드는 422."""
        res = await client.get(f"{URL}/page", params={"sort": "password"})
        assert res.status_code == 422
        assert res.json()["detail"][0]["field"] == "sort"

    async def test_page_zero(self, client: AsyncClient):
        """페이지 번호 0은 422."""
        res = await client.get(f"{URL}/page", params={"page": 0})
        assert res.status_code == 422


class TestProductUpdate:
    """상품 수정 테스트 — 전체 덮어쓰기."""

    async def test_update_overwrites_all_mutable_fields(self, client: AsyncClient, product):
        """생략된 필드는 null/기본값으로 덮어씀."""
        res = await client.put(f"{URL}/{product.id}", json={
            "name": "Renamed Mouse",
            "price": "25.00",
        })
        assert res.status_code == 200
        data = res.json()
        assert data["name"] == "Renamed Mouse"
        assert data["price"] == "25.00"
        assert data["description"] is None
        assert data["image_url"] is None
        assert data["category_id"] is None
        assert data["stock_quantity"] == 0
        assert data["active"] is True

    async def test_update_keeps_sku_brand_created_at(self, client: AsyncClient, product):
        """SKU, 브랜드, 생성 일시는 수정되지 않음."""
        before = (await client.get(f"{URL}/{product.id}")).json()

        res = await client.put(f"{URL}/{product.id}", json={
            "name": "X",
            "price": "1.00",
            "sku": "CHANGED",
            "brand": "Other",
        })
        data = res.json()
        assert data["sku"] == "WM-001"
        assert data["brand"] == "Logi"
        assert data["created_at"] == before["created_at"]

    async def test_update_nonexistent(self, client: AsyncClient):
        """존재하지 않는 상품 수정 시 404."""
        res = await client.put(f"{URL}/9999", json={"name": "X", "price": "1.00"})
        assert res.status_code == 404

    async def test_update_requires_name_and_price(self, client: AsyncClient, product):
        """전체 덮어쓰기이므로 필수 필드 누락 시 422."""
        res = await client.put(f"{URL}/{product.id}", json={"description": "only"})
        assert res.status_code == 422


class TestProductDelete:
    """상품 삭제 테스트."""

    async def test_delete_product(self, client: AsyncClient, product):
        """상품 삭제 후 조회 시 404, 존재 여부 false."""
        res = await client.delete(f"{URL}/{product.id}")
        assert res.status_code == 204

        res2 = await client.get(f"{URL}/{product.id}")
        assert res2.status_code == 404
        assert (await client.get(f"{URL}/exists/{product.id}")).json() is False

    async def test_delete_nonexistent(self, client: AsyncClient):
        """존재하지 않는 상품 삭제 시 404."""
        res = await client.delete(f"{URL}/9999")
        assert res.status_code == 404


class TestProductNumericBounds:
    """숫자 범위 검증 테스트."""

    async def test_huge_product_id(self, client: AsyncClient):
        """범위 밖 상품 ID는 조회/수정/삭제/존재 확인 모두 422."""
        huge = 10**20
        assert (await client.get(f"{URL}/{huge}")).status_code == 422
        assert (await client.put(f"{URL}/{huge}", json={"name": "X", "price": "1.00"})).status_code == 422
        assert (await client.delete(f"{URL}/{huge}")).status_code == 422
        assert (await client.get(f"{URL}/exists/{huge}")).status_code == 422
        assert (await client.get(f"{URL}/category/{huge}")).status_code == 422

    async def test_stock_quantity_above_integer_column(self, client: AsyncClient):
        """재고 수량이 INTEGER 범위를 넘으면 422."""
        res = await client.post(URL, json=_payload(stock_quantity=2**31))
        assert res.status_code == 422
        assert res.json()["detail"][0]["field"] == "stock_quantity"

    async def test_huge_category_reference(self, client: AsyncClient):
        """범위 밖 분류 ID 참조는 422."""
        res = await client.post(URL, json=_payload(category_id=10**20))
        assert res.status_code == 422
        assert res.json()["detail"][0]["field"] == "category_id"

    async def test_duplicate_sku_race_is_conflict(self, client: AsyncClient, product, monkeypatch):
        """SKU 사전 검사를 통과해도 DB 고유 제약 위반은 409."""
        from app.repositories.product_repository import product_repository

        async def _never_exists(db, sku):
            return False

        monkeypatch.setattr(product_repository, "exists_by_sku", _never_exists)

        res = await client.post(URL, json=_payload(sku=product.sku))
        assert res.status_code == 409
