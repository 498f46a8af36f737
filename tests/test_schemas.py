"""
Tests for tool argument schemas
"""
import pytest
from pydantic import ValidationError
from defaults.schemas import (
    GetApiInfoArgs,
    GetComponentGuideArgs,
    GetContractAddressesArgs,
    GetSdkPatternArgs,
    SearchDocsArgs,
)


class TestSearchDocsArgs:
    """Tests for SearchDocsArgs"""

    @pytest.mark.unit
    def test_default_limit(self):
        """Test that limit defaults to 5"""
        assert SearchDocsArgs(query="vault").limit == 5

    @pytest.mark.unit
    @pytest.mark.parametrize("limit", [0, 11])
    def test_limit_bounds(self, limit):
        """Test that limit must be between 1 and 10"""
        with pytest.raises(ValidationError):
            SearchDocsArgs(query="vault", limit=limit)

    @pytest.mark.unit
    def test_query_required(self):
        """Test that query is required"""
        with pytest.raises(ValidationError):
            SearchDocsArgs()


class TestDefaults:
    """Tests for optional argument defaults"""

    @pytest.mark.unit
    def test_sdk_pattern_includes_example(self):
        """Test includeExample defaults to True"""
        assert GetSdkPatternArgs(pattern="useOrderEntry").includeExample is True

    @pytest.mark.unit
    def test_contract_defaults(self):
        """Test contract lookup defaults"""
        args = GetContractAddressesArgs(chain="arbitrum")
        assert args.contractType == "all"
        assert args.network == "mainnet"

    @pytest.mark.unit
    def test_component_complexity(self):
        """Test component complexity defaults to standard"""
        assert GetComponentGuideArgs(component="orderbook").complexity == "standard"

    @pytest.mark.unit
    def test_api_info_optional_fields(self):
        """Test that endpoint and category are optional"""
        args = GetApiInfoArgs(type="rest")
        assert args.endpoint is None
        assert args.category is None
