"""사용자 프로필 API 테스트.

User profile API tests — CRUD lifecycle, secondary-key uniqueness,
partial-merge updates, activation toggles and search endpoints.
"""

from httpx import AsyncClient

URL = "/api/users"

JOHN = {"first_name": "John", "last_name": "Doe", "email": "john.doe@example.com"}


class TestUserLifecycle:
    """사용자 생성-조회-삭제 흐름 테스트."""

    async def test_create_conflict_delete_flow(self, client: AsyncClient):
        """생성 201 → 같은 이메일 409 → 삭제 204 → 조회 404."""
        res = await client.post(URL, json=JOHN)
        assert res.status_code == 201
        created = res.json()
        assert created["id"] > 0
        assert created["email"] == "john.doe@example.com"
        assert created["active"] is True

        dup = await client.post(URL, json={**JOHN, "first_name": "Johnny"})
        assert dup.status_code == 409

        res2 = await client.delete(f"{URL}/{created['id']}")
        assert res2.status_code == 204

        res3 = await client.get(f"{URL}/{created['id']}")
        assert res3.status_code == 404

    async def test_delete_clears_existence_and_count(self, client: AsyncClient, user_profile):
        """삭제 후 존재 여부 false, 개수 감소."""
        created = (await client.post(URL, json=JOHN)).json()
        assert (await client.get(f"{URL}/count")).json() == 2

        res = await client.delete(f"{URL}/{created['id']}")
        assert res.status_code == 204

        assert (await client.get(f"{URL}/exists/email/{JOHN['email']}")).json() is False
        assert (await client.get(f"{URL}/count")).json() == 1


class TestUserCreate:
    """사용자 생성 테스트."""

    async def test_duplicate_user_id(self, client: AsyncClient, user_profile):
        """같은 user_id로 생성 시 409."""
        res = await client.post(URL, json={**JOHN, "user_id": user_profile.user_id})
        assert res.status_code == 409
        assert "userId" in res.json()["detail"]

    async def test_invalid_email(self, client: AsyncClient):
        """잘못된 이메일 형식은 422."""
        res = await client.post(URL, json={**JOHN, "email": "not-an-email"})
        assert res.status_code == 422
        assert res.json()["detail"] == [{"field": "email", "message": "Email should be valid"}]

    async def test_short_first_name(self, client: AsyncClient):
        """이름이 2자 미만이면 422."""
        res = await client.post(URL, json={**JOHN, "first_name": "J"})
        assert res.status_code == 422
        assert res.json()["detail"][0]["field"] == "first_name"

    async def test_missing_required_fields(self, client: AsyncClient):
        """필수 필드 누락 시 모든 위반을 함께 반환."""
        res = await client.post(URL, json={})
        assert res.status_code == 422
        fields = {v["field"] for v in res.json()["detail"]}
        assert fields == {"first_name", "last_name", "email"}

    async def test_field_too_long(self, client: AsyncClient):
        """우편번호 길이 초과 시 422."""
        res = await client.post(URL, json={**JOHN, "zip_code": "12345678901"})
        assert res.status_code == 422
        assert res.json()["detail"][0]["field"] == "zip_code"

    async def test_wrong_json_type(self, client: AsyncClient):
        """잘못된 JSON 타입도 필드 위반 형식으로 422."""
        res = await client.post(URL, json={**JOHN, "user_id": "abc"})
        assert res.status_code == 422
        assert res.json()["detail"][0]["field"] == "user_id"


class TestUserRead:
    """사용자 조회 테스트."""

    async def test_get_by_email(self, client: AsyncClient, user_profile):
        """이메일로 조회, 없으면 404."""
        res = await client.get(f"{URL}/email/{user_profile.email}")
        assert res.status_code == 200
        assert res.json()["id"] == user_profile.id

        res2 = await client.get(f"{URL}/email/nobody@example.com")
        assert res2.status_code == 404

    async def test_get_by_user_id(self, client: AsyncClient, user_profile):
        """소유 사용자 ID로 조회."""
        res = await client.get(f"{URL}/user-id/100")
        assert res.json()["email"] == user_profile.email
        assert (await client.get(f"{URL}/user-id/999")).status_code == 404

    async def test_list_and_count(self, client: AsyncClient, user_profile):
        """전체 목록과 개수."""
        await client.post(URL, json=JOHN)

        res = await client.get(URL)
        assert len(res.json()) == 2
        assert (await client.get(f"{URL}/count")).json() == 2

    async def test_recent_newest_first(self, client: AsyncClient, user_profile):
        """최근 생성 순 목록."""
        await client.post(URL, json=JOHN)

        res = await client.get(f"{URL}/recent")
        assert [u["first_name"] for u in res.json()] == ["John", "Jane"]

    async def test_exists(self, client: AsyncClient, user_profile):
        """이메일/user_id 존재 여부."""
        assert (await client.get(f"{URL}/exists/email/{user_profile.email}")).json() is True
        assert (await client.get(f"{URL}/exists/email/x@example.com")).json() is False
        assert (await client.get(f"{URL}/exists/user-id/100")).json() is True
        assert (await client.get(f"{URL}/exists/user-id/101")).json() is False

    async def test_filters(self, client: AsyncClient, user_profile):
        """역할, 도시, 국가 완전 일치 필터."""
        assert len((await client.get(f"{URL}/role/USER")).json()) == 1
        assert (await client.get(f"{URL}/role/ADMIN")).json() == []
        assert len((await client.get(f"{URL}/city/Seattle")).json()) == 1
        assert len((await client.get(f"{URL}/country/USA")).json()) == 1
        assert (await client.get(f"{URL}/country/usa")).json() == []

    async def test_search(self, client: AsyncClient, user_profile):
        """이름 검색 — 대소문자 무시 부분 일치."""
        await client.post(URL, json=JOHN)

        res = await client.get(f"{URL}/search/firstname", params={"firstName": "JAN"})
        assert [u["first_name"] for u in res.json()] == ["Jane"]

        res2 = await client.get(f"{URL}/search/lastname", params={"lastName": "do"})
        assert [u["last_name"] for u in res2.json()] == ["Doe"]

        res3 = await client.get(f"{URL}/search", params={"q": "sm"})
        assert [u["last_name"] for u in res3.json()] == ["Smith"]

    async def test_page(self, client: AsyncClient, user_profile):
        """페이지 조회와 X-Total-Count 헤더."""
        await client.post(URL, json=JOHN)

        res = await client.get(f"{URL}/page", params={"per_page": 1, "sort": "first_name,asc"})
        assert res.status_code == 200
        assert res.headers["X-Total-Count"] == "2"
        data = res.json()
        assert data["pages"] == 2
        assert data["items"][0]["first_name"] == "Jane"

    async def test_page_size_too_large(self, client: AsyncClient):
        """최대 페이지 크기 초과 시 422."""
        res = await client.get(f"{URL}/page", params={"per_page": 1000})
        assert res.status_code == 422
        assert res.json()["detail"][0]["field"] == "per_page"

    async def test_health(self, client: AsyncClient):
        """서비스 상태 확인 — 일반 텍스트."""
        res = await client.get(f"{URL}/health")
        assert res.status_code == 200
        assert res.text == "User Service is running"


class TestUserUpdate:
    """사용자 수정 테스트 — 부분 병합."""

    async def test_partial_merge_keeps_other_fields(self, client: AsyncClient, user_profile):
        """전달된 필드만 변경되고 나머지는 유지됨."""
        res = await client.put(f"{URL}/{user_profile.id}", json={"city": "Portland"})
        assert res.status_code == 200
        data = res.json()
        assert data["city"] == "Portland"
        assert data["first_name"] == "Jane"
        assert data["phone"] == "555-0100"
        assert data["email"] == "jane.smith@example.com"
        assert data["user_id"] == 100

    async def test_update_keeps_id_and_created_at(self, client: AsyncClient, user_profile):
        """수정 후에도 ID와 생성 일시는 유지, 수정 일시는 갱신."""
        before = (await client.get(f"{URL}/{user_profile.id}")).json()

        res = await client.put(f"{URL}/{user_profile.id}", json={"first_name": "Janet"})
        data = res.json()
        assert data["id"] == before["id"]
        assert data["created_at"] == before["created_at"]
        assert data["updated_at"] >= before["updated_at"]
        assert data["first_name"] == "Janet"

    async def test_same_email_is_not_conflict(self, client: AsyncClient, user_profile):
        """자기 자신의 이메일로 수정은 허용."""
        res = await client.put(f"{URL}/{user_profile.id}", json={"email": user_profile.email})
        assert res.status_code == 200

    async def test_email_taken(self, client: AsyncClient, user_profile):
        """다른 사용자의 이메일로 변경 시 409."""
        await client.post(URL, json=JOHN)
        res = await client.put(f"{URL}/{user_profile.id}", json={"email": JOHN["email"]})
        assert res.status_code == 409
        assert res.json()["detail"] == f"Email {JOHN['email']} is already taken"

    async def test_update_nonexistent(self, client: AsyncClient):
        """존재하지 않는 사용자 수정 시 404."""
        res = await client.put(f"{URL}/9999", json={"city": "X"})
        assert res.status_code == 404

    async def test_update_invalid_email(self, client: AsyncClient, user_profile):
        """수정 시에도 이메일 형식을 검사함."""
        res = await client.put(f"{URL}/{user_profile.id}", json={"email": "bad"})
        assert res.status_code == 422


class TestUserActivation:
    """활성/비활성 전환 테스트."""

    async def test_deactivate_then_activate(self, client: AsyncClient, user_profile):
        """비활성화 후 활성 목록에서 제외, 재활성화 시 복귀."""
        res = await client.patch(f"{URL}/{user_profile.id}/deactivate")
        assert res.status_code == 200
        assert res.json()["active"] is False
        assert (await client.get(f"{URL}/active")).json() == []

        res2 = await client.patch(f"{URL}/{user_profile.id}/activate")
        assert res2.json()["active"] is True
        assert len((await client.get(f"{URL}/active")).json()) == 1

    async def test_activate_is_idempotent(self, client: AsyncClient, user_profile):
        """이미 활성 상태에서 활성화해도 결과 동일."""
        res = await client.patch(f"{URL}/{user_profile.id}/activate")
        res2 = await client.patch(f"{URL}/{user_profile.id}/activate")
        assert res.json()["active"] is True
        assert res2.json()["active"] is True

    async def test_activate_nonexistent(self, client: AsyncClient):
        """존재하지 않는 사용자 활성화 시 404."""
        res = await client.patch(f"{URL}/9999/activate")
        assert res.status_code == 404


class TestUserDelete:
    """사용자 삭제 테스트."""

    async def test_delete_nonexistent(self, client: AsyncClient):
        """존재하지 않는 사용자 삭제 시 404."""
        res = await client.delete(f"{URL}/9999")
        assert res.status_code == 404


class TestUserNumericBounds:
    """64비트 범위를 벗어난 숫자 입력 테스트."""

    async def test_huge_profile_id(self, client: AsyncClient):
        """범위 밖 ID 조회는 422, 서버 오류 없음."""
        res = await client.get(f"{URL}/{10**20}")
        assert res.status_code == 422
        assert res.json()["detail"][0]["field"] == "profile_id"

    async def test_largest_profile_id_is_not_found(self, client: AsyncClient):
        """64비트 최대값 ID는 정상적으로 404."""
        res = await client.get(f"{URL}/{2**63 - 1}")
        assert res.status_code == 404

    async def test_huge_user_id_lookup(self, client: AsyncClient):
        """범위 밖 user_id 조회/존재 확인은 422."""
        assert (await client.get(f"{URL}/user-id/{10**20}")).status_code == 422
        assert (await client.get(f"{URL}/exists/user-id/{10**20}")).status_code == 422

    async def test_huge_page_number(self, client: AsyncClient):
        """offset이 64비트를 넘는 페이지 번호는 422."""
        res = await client.get(f"{URL}/page", params={"page": 10**18, "per_page": 100})
        assert res.status_code == 422
        assert res.json()["detail"][0]["field"] == "page"

    async def test_create_with_huge_user_id(self, client: AsyncClient):
        """범위 밖 user_id로 생성 시 필드 위반 422."""
        res = await client.post(URL, json={**JOHN, "user_id": 10**20})
        assert res.status_code == 422
        assert res.json()["detail"] == [
            {"field": "user_id", "message": f"User ID must not exceed {2**63 - 1}"}
        ]


class TestUserRequestErrors:
    """요청 본문 및 제약 조건 오류 테스트."""

    async def test_missing_body(self, client: AsyncClient):
        """본문 전체가 없으면 field="body"로 422."""
        res = await client.post(URL)
        assert res.status_code == 422
        assert res.json()["detail"][0]["field"] == "body"

    async def test_unique_constraint_race_is_conflict(
        self, client: AsyncClient, user_profile, monkeypatch,
    ):
        """사전 중복 검사를 통과해도 DB 고유 제약 위반은 409."""
        from app.repositories.user_profile_repository import user_profile_repository

        async def _never_exists(db, email):
            return False

        # 동시 요청이 검사 직후 같은 이메일을 먼저 저장한 상황 재현
        monkeypatch.setattr(user_profile_repository, "exists_by_email", _never_exists)

        res = await client.post(URL, json={**JOHN, "email": user_profile.email})
        assert res.status_code == 409
        assert res.json()["detail"] == "Request conflicts with an existing record"
