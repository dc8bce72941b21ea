"""Tests for asset creation, replacement and soft deletion."""

import pytest

from services.asset_registry.models import (
    NO_IDENTITY,
    AssetFields,
    AssetNotFoundError,
    RegistryError,
)
from services.asset_registry.service import AssetRegistryService
from tests.conftest import ALICE, BOB, MALLORY, forecast


class TestCreateAsset:
    """Tests for asset creation."""

    @pytest.mark.asyncio
    async def test_create_then_get_round_trip(
        self,
        registered_service: AssetRegistryService,
        sample_asset_fields: AssetFields,
    ) -> None:
        """Test that stored fields match the input and lifecycle state is clean."""
        outcome = await registered_service.create_asset(ALICE, sample_asset_fields)

        assert outcome.created is True
        assert outcome.success is True
        assert outcome.new_index == 0

        asset = registered_service.assets.get(outcome.new_index)

        assert asset.descriptive_fields() == sample_asset_fields
        assert asset.created_by == 1
        assert asset.deleted_by == NO_IDENTITY
        assert asset.replaced_by is None
        assert asset.is_deleted is False
        assert asset.forecast_refs == []
        assert asset.actual_refs == []

    @pytest.mark.asyncio
    async def test_indices_are_dense_and_increasing(
        self,
        registered_service: AssetRegistryService,
        sample_asset_fields: AssetFields,
    ) -> None:
        """Test dense 0-based allocation across callers."""
        indices = [
            (await registered_service.create_asset(caller, sample_asset_fields)).new_index
            for caller in (ALICE, BOB, ALICE)
        ]

        assert indices == [0, 1, 2]
        assert registered_service.assets.count == 3

    @pytest.mark.asyncio
    async def test_unregistered_caller_rejected(
        self,
        registered_service: AssetRegistryService,
        sample_asset_fields: AssetFields,
    ) -> None:
        """Test that an unknown credential creates nothing."""
        outcome = await registered_service.create_asset(MALLORY, sample_asset_fields)

        assert outcome.created is False
        assert outcome.caller_authorized is False
        assert outcome.new_index is None
        assert outcome.error == RegistryError.UNAUTHORIZED
        assert registered_service.assets.count == 0

    @pytest.mark.asyncio
    async def test_stored_asset_is_isolated_from_reads(
        self,
        registered_service: AssetRegistryService,
        sample_asset_fields: AssetFields,
    ) -> None:
        """Test that mutating a read snapshot does not touch the registry."""
        await registered_service.create_asset(ALICE, sample_asset_fields)

        snapshot = registered_service.assets.get(0)
        snapshot.deleted_by = 2
        snapshot.forecast_refs.append(7)

        stored = registered_service.assets.get(0)
        assert stored.deleted_by == NO_IDENTITY
        assert stored.forecast_refs == []


class TestReplaceAsset:
    """Tests for the replace-chain."""

    @pytest.mark.asyncio
    async def test_replace_retires_target(
        self,
        registered_service: AssetRegistryService,
        sample_asset_fields: AssetFields,
    ) -> None:
        """Test that replacing A with B deletes A and links it to B."""
        a = await registered_service.create_asset(ALICE, sample_asset_fields)
        replacement = sample_asset_fields.model_copy(update={"asset_number": "AST-0002"})

        b = await registered_service.create_asset(
            BOB, replacement, replace_target=a.new_index
        )

        assert b.created is True
        assert b.replaced_index == a.new_index

        old = registered_service.assets.get(a.new_index)
        new = registered_service.assets.get(b.new_index)

        assert old.replaced_by == b.new_index
        assert old.deleted_by == 2
        assert old.is_replaced is True
        assert new.deleted_by == NO_IDENTITY
        assert new.replaced_by is None
        assert new.asset_number == "AST-0002"

    @pytest.mark.asyncio
    async def test_asset_zero_is_a_genuine_replacement_target(
        self,
        registered_service: AssetRegistryService,
        sample_asset_fields: AssetFields,
    ) -> None:
        """Test that asset 0 can be replaced and is distinguishable from 'not replaced'."""
        await registered_service.create_asset(ALICE, sample_asset_fields)
        await registered_service.create_asset(ALICE, sample_asset_fields, replace_target=0)

        assert registered_service.assets.get(0).replaced_by == 1
        assert registered_service.assets.get(1).replaced_by is None

    @pytest.mark.asyncio
    async def test_unknown_replace_target_writes_nothing(
        self,
        registered_service: AssetRegistryService,
        sample_asset_fields: AssetFields,
    ) -> None:
        """Test that an out-of-range replace target aborts the whole creation."""
        await registered_service.create_asset(ALICE, sample_asset_fields)

        outcome = await registered_service.create_asset(
            ALICE, sample_asset_fields, replace_target=5
        )

        assert outcome.created is False
        assert outcome.caller_authorized is True
        assert outcome.error == RegistryError.NOT_FOUND
        assert registered_service.assets.count == 1

    @pytest.mark.asyncio
    async def test_unauthorized_replace_leaves_target_untouched(
        self,
        registered_service: AssetRegistryService,
        sample_asset_fields: AssetFields,
    ) -> None:
        """Test that neither half of a replacement happens without authorization."""
        await registered_service.create_asset(ALICE, sample_asset_fields)

        outcome = await registered_service.create_asset(
            MALLORY, sample_asset_fields, replace_target=0
        )

        target = registered_service.assets.get(0)
        assert outcome.error == RegistryError.UNAUTHORIZED
        assert registered_service.assets.count == 1
        assert target.deleted_by == NO_IDENTITY
        assert target.replaced_by is None


class TestSoftDelete:
    """Tests for soft deletion."""

    @pytest.mark.asyncio
    async def test_soft_delete(
        self,
        registered_service: AssetRegistryService,
        sample_asset_fields: AssetFields,
    ) -> None:
        """Test that deleting flags the asset but keeps it readable."""
        await registered_service.create_asset(ALICE, sample_asset_fields)

        outcome = await registered_service.soft_delete_asset(ALICE, 0)

        assert outcome.asset_found is True
        assert outcome.caller_authorized is True
        assert outcome.success is True
        asset = registered_service.assets.get(0)
        assert asset.deleted_by == 1
        assert asset.replaced_by is None
        assert registered_service.assets.count == 1

    @pytest.mark.asyncio
    async def test_any_identity_may_delete_any_asset(
        self,
        registered_service: AssetRegistryService,
        sample_asset_fields: AssetFields,
    ) -> None:
        """Test that deletion is not restricted to the creator."""
        await registered_service.create_asset(ALICE, sample_asset_fields)

        outcome = await registered_service.soft_delete_asset(BOB, 0)

        assert outcome.success is True
        assert registered_service.assets.get(0).deleted_by == 2

    @pytest.mark.asyncio
    async def test_second_delete_wins(
        self,
        registered_service: AssetRegistryService,
        sample_asset_fields: AssetFields,
    ) -> None:
        """Test last-write-wins when two identities delete the same asset."""
        await registered_service.create_asset(ALICE, sample_asset_fields)

        await registered_service.soft_delete_asset(ALICE, 0)
        second = await registered_service.soft_delete_asset(BOB, 0)

        assert second.success is True
        assert registered_service.assets.get(0).deleted_by == 2

    @pytest.mark.asyncio
    async def test_out_of_range_not_found(
        self,
        registered_service: AssetRegistryService,
        sample_asset_fields: AssetFields,
    ) -> None:
        """Test that an unknown index fails and changes nothing."""
        await registered_service.create_asset(ALICE, sample_asset_fields)

        outcome = await registered_service.soft_delete_asset(ALICE, 1)

        assert outcome.asset_found is False
        assert outcome.caller_authorized is True
        assert outcome.success is False
        assert outcome.error == RegistryError.NOT_FOUND
        assert registered_service.assets.count == 1
        assert registered_service.assets.get(0).deleted_by == NO_IDENTITY

    @pytest.mark.asyncio
    async def test_negative_index_not_found(
        self,
        registered_service: AssetRegistryService,
        sample_asset_fields: AssetFields,
    ) -> None:
        """Test that negative indices never wrap around to existing assets."""
        await registered_service.create_asset(ALICE, sample_asset_fields)

        outcome = await registered_service.soft_delete_asset(ALICE, -1)

        assert outcome.error == RegistryError.NOT_FOUND
        assert registered_service.assets.get(0).deleted_by == NO_IDENTITY

    @pytest.mark.asyncio
    async def test_unauthorized_takes_precedence(
        self,
        registered_service: AssetRegistryService,
        sample_asset_fields: AssetFields,
    ) -> None:
        """Test an unknown caller is rejected while existence is still reported."""
        await registered_service.create_asset(ALICE, sample_asset_fields)

        existing = await registered_service.soft_delete_asset(MALLORY, 0)
        missing = await registered_service.soft_delete_asset(MALLORY, 9)

        assert existing.error == RegistryError.UNAUTHORIZED
        assert existing.asset_found is True
        assert existing.caller_authorized is False
        assert missing.error == RegistryError.UNAUTHORIZED
        assert missing.asset_found is False
        assert registered_service.assets.get(0).deleted_by == NO_IDENTITY


class TestUnauthorizedCallers:
    """Every mutation by an unregistered credential leaves state unchanged."""

    @pytest.mark.asyncio
    async def test_state_unchanged(
        self,
        registered_service: AssetRegistryService,
        sample_asset_fields: AssetFields,
    ) -> None:
        """Test a full snapshot before and after a series of rejected calls."""
        await registered_service.create_asset(ALICE, sample_asset_fields)
        await registered_service.add_forecast_batch(ALICE, [forecast(0)])

        before = registered_service.list_assets().model_dump()
        stats_before = registered_service.stats()

        await registered_service.create_asset(MALLORY, sample_asset_fields)
        await registered_service.create_asset(MALLORY, sample_asset_fields, replace_target=0)
        await registered_service.soft_delete_asset(MALLORY, 0)
        await registered_service.add_forecast_batch(MALLORY, [forecast(0), forecast(0)])

        assert registered_service.list_assets().model_dump() == before
        assert registered_service.stats() == stats_before


class TestReads:
    """Tests for raw asset reads."""

    def test_get_unknown_asset_raises(self, service: AssetRegistryService) -> None:
        """Test that reading an unallocated index raises AssetNotFoundError."""
        with pytest.raises(AssetNotFoundError) as exc_info:
            service.assets.get(0)

        assert exc_info.value.index == 0
        assert isinstance(exc_info.value, LookupError)
