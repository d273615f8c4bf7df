"""Tests for CatalogService orchestration."""
from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from perfume_catalog.services.catalog_service import MAX_PERFUME_ID, CatalogService, parse_perfume_id
from perfume_catalog.services.errors import InvalidIdentifier, PerfumeNotFound, PerfumeValidationError
from perfume_catalog.services.perfume_repository import PerfumeRepository


@pytest.fixture
def service(repository: PerfumeRepository) -> CatalogService:
    return CatalogService(repository)


class TestParsePerfumeId:
    @pytest.mark.parametrize("raw, expected", [("1", 1), ("42", 42), (7, 7), (str(MAX_PERFUME_ID), MAX_PERFUME_ID)])
    def test_valid(self, raw: Any, expected: int) -> None:
        assert parse_perfume_id(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        ["0", "-1", "abc", "1.5", "", " ", "1e3", "١٢", None, True, 0, str(MAX_PERFUME_ID + 1)],
    )
    def test_invalid(self, raw: Any) -> None:
        with pytest.raises(InvalidIdentifier):
            parse_perfume_id(raw)


class TestCatalogService:
    """Test suite for CatalogService."""

    def test_create_applies_defaults(self, service: CatalogService) -> None:
        created = service.create_perfume({"name": "Aqua", "brand": "Marine", "category": "fresh"})

        assert created.is_available is True
        assert created.stock_quantity == 0
        assert created.gender.value == "unisex"

    def test_create_rejects_invalid_payload(self, service: CatalogService, repository: PerfumeRepository) -> None:
        with pytest.raises(PerfumeValidationError):
            service.create_perfume({"name": "Aqua"})

        assert repository.list_active() == []

    def test_get_perfume(self, service: CatalogService, perfume_payload: dict[str, Any]) -> None:
        created = service.create_perfume(perfume_payload)

        assert service.get_perfume(str(created.id)) == created

    def test_get_perfume_not_found(self, service: CatalogService) -> None:
        with pytest.raises(PerfumeNotFound) as exc:
            service.get_perfume("999999")

        assert exc.value.perfume_id == 999999

    def test_get_perfume_invalid_id(self, service: CatalogService) -> None:
        with pytest.raises(InvalidIdentifier):
            service.get_perfume("abc")

    def test_list_dispatches_to_search(self, service: CatalogService) -> None:
        service.create_perfume({"name": "Rose Garden", "brand": "Flora"})
        service.create_perfume({"name": "Leather", "brand": "Saddle"})

        assert [p.name for p in service.list_perfumes("rose")] == ["Rose Garden"]
        assert len(service.list_perfumes(None)) == 2
        assert len(service.list_perfumes("")) == 2

    def test_update_replaces_all_fields(self, service: CatalogService, perfume_payload: dict[str, Any]) -> None:
        created = service.create_perfume(perfume_payload)

        updated = service.update_perfume(str(created.id), {"name": "Oud Royal", "brand": "Maison Ambre"})

        assert updated.id == created.id
        assert updated.description is None
        assert updated.price is None
        assert updated.category is None
        assert updated.image_url is None
        assert updated.gender.value == "unisex"
        assert service.get_perfume(created.id) == updated

    def test_update_not_found_has_no_side_effects(self, service: CatalogService) -> None:
        with pytest.raises(PerfumeNotFound):
            service.update_perfume("12345", {"name": "X", "brand": "Y"})

        assert service.list_perfumes() == []

    def test_update_checks_existence_before_validation(self, service: CatalogService) -> None:
        with pytest.raises(PerfumeNotFound):
            service.update_perfume("12345", {"category": "nope"})

    def test_update_validation_error_leaves_row_untouched(
        self, service: CatalogService, perfume_payload: dict[str, Any]
    ) -> None:
        created = service.create_perfume(perfume_payload)

        with pytest.raises(PerfumeValidationError):
            service.update_perfume(created.id, {"name": "X", "brand": "Y", "volume": -1})

        assert service.get_perfume(created.id) == created

    def test_update_can_deactivate(self, service: CatalogService) -> None:
        created = service.create_perfume({"name": "Aqua", "brand": "Marine"})

        updated = service.update_perfume(created.id, {"name": "Aqua", "brand": "Marine", "is_available": False})

        assert updated.is_available is False
        with pytest.raises(PerfumeNotFound):
            service.get_perfume(created.id)

    def test_update_race_maps_to_not_found(self, perfume_payload: dict[str, Any]) -> None:
        """Row vanishing between the existence check and the write is reported as NotFound."""
        repository = MagicMock(spec=PerfumeRepository)
        repository.get_active.return_value = object()
        repository.update.return_value = 0

        with pytest.raises(PerfumeNotFound):
            CatalogService(repository).update_perfume("5", perfume_payload)

    def test_delete_twice(self, service: CatalogService) -> None:
        created = service.create_perfume({"name": "Aqua", "brand": "Marine"})

        service.delete_perfume(str(created.id))

        with pytest.raises(PerfumeNotFound):
            service.delete_perfume(str(created.id))
        assert service.list_perfumes() == []

    def test_delete_race_maps_to_not_found(self) -> None:
        repository = MagicMock(spec=PerfumeRepository)
        repository.get_active.return_value = object()
        repository.soft_delete.return_value = 0

        with pytest.raises(PerfumeNotFound):
            CatalogService(repository).delete_perfume("5")

    def test_image_url_stored_verbatim(self, service: CatalogService) -> None:
        created = service.create_perfume(
            {"name": "Aqua", "brand": "Marine", "image_url": "/uploads/perfume_does_not_exist.png"}
        )

        assert created.image_url == "/uploads/perfume_does_not_exist.png"
