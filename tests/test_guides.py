"""
Tests for the documentation, SDK pattern, workflow and component facades
"""
import pytest


class TestDocsSearch:
    """Tests for search_orderly_docs"""

    @pytest.mark.unit
    def test_empty_query(self, library):
        """Test that an empty query asks for input"""
        assert library.docs.search("  ") == "Please provide a search query."

    @pytest.mark.unit
    def test_single_result(self, library):
        """Test result layout for one matching section"""
        result = library.docs.search("vault")
        assert result.startswith('# Search Results for "vault"')
        assert "Found 1 relevant section:" in result
        assert "## 1. Vault and Deposits" in result
        assert "**Category:** Protocol | **Relevance:** 100%" in result
        assert "*Keywords: vault, deposit*" in result

    @pytest.mark.unit
    def test_no_results_lists_categories(self, library):
        """Test the no-results message"""
        result = library.docs.search("xyzzyqwv")
        assert result.startswith('No results found for "xyzzyqwv"')
        assert "Available categories: Protocol, API, SDK" in result

    @pytest.mark.unit
    def test_hook_tip_without_sdk_results(self, library):
        """Test that hook-like queries without SDK hits suggest get_sdk_pattern"""
        result = library.docs.search("user funds")
        assert "Vault and Deposits" in result
        assert '**Tip:** For specific SDK hook examples, try the "get_sdk_pattern" tool' in result

    @pytest.mark.unit
    def test_no_tip_for_plain_queries(self, library):
        """Test that ordinary queries carry no tip"""
        assert "**Tip:**" not in library.docs.search("vault")

    @pytest.mark.unit
    def test_long_question_matches_partial_title(self, library):
        """Test that a question finds a section holding only some of its words"""
        result = library.docs.search("explain vault deposit limits and requirements")
        assert "Found 1 relevant section:" in result
        assert "## 1. Vault and Deposits" in result

    @pytest.mark.unit
    def test_stopword_only_query(self, library):
        """Test that a query of one-letter filler words matches nothing"""
        assert library.docs.search("a").startswith('No results found for "a"')

    @pytest.mark.unit
    def test_limit_respected(self, library):
        """Test that limit caps the number of sections"""
        result = library.docs.search("orderbook", limit=1)
        assert "## 2." not in result


class TestSdkPatterns:
    """Tests for get_sdk_pattern"""

    @pytest.mark.unit
    def test_exact_name(self, library):
        """Test that an exact hook name renders the full pattern"""
        result = library.sdk_patterns.get_pattern("useOrderEntry")
        assert result.startswith("# useOrderEntry")
        assert "**Category:** Trading" in result
        assert "## Installation" in result
        assert "## Example" in result
        assert "- Prices are strings" in result
        assert "## Related Patterns" in result

    @pytest.mark.unit
    def test_exclude_example(self, library):
        """Test that includeExample=False drops the example section"""
        result = library.sdk_patterns.get_pattern("useOrderEntry", include_example=False)
        assert "## Example" not in result
        assert "## Usage" in result

    @pytest.mark.unit
    def test_typo_resolves(self, library):
        """Test that a typo in the hook name still finds it"""
        assert library.sdk_patterns.get_pattern("useOrdrEntry").startswith("# useOrderEntry")

    @pytest.mark.unit
    def test_ambiguous_query_lists_candidates(self, library):
        """Test that several competing matches produce a candidate list"""
        result = library.sdk_patterns.get_pattern("order")
        assert result.startswith('Multiple patterns found for "order"')
        assert "**useOrderEntry** (Trading)" in result
        assert "**useOrderStream** (Trading)" in result
        assert "% match" in result
        assert "Please specify a specific pattern name." in result

    @pytest.mark.unit
    def test_not_found_lists_available(self, library):
        """Test the not-found message"""
        result = library.sdk_patterns.get_pattern("xyzzyqwv")
        assert result.startswith('No SDK pattern found for "xyzzyqwv"')
        assert "useWalletConnector (Account)" in result

    @pytest.mark.unit
    def test_empty_pattern(self, library):
        """Test that an empty pattern asks for input"""
        assert library.sdk_patterns.get_pattern("") == "Please provide a pattern name to search for."


class TestPythonSdkPatterns:
    """Tests for get_python_sdk_pattern"""

    @pytest.mark.unit
    def test_exact_name(self, library):
        """Test Python SDK rendering"""
        result = library.python_sdk.get_pattern("buy")
        assert result.startswith("# Python SDK: buy")
        assert "Category: Trading" in result
        assert "```bash\npip install agent-trading-sdk\n```" in result
        assert "```python\nclient.buy" in result

    @pytest.mark.unit
    def test_see_also_lists_other_matches(self, library):
        """Test that other quality matches are listed after the chosen one"""
        result = library.python_sdk.get_pattern("positions")
        assert result.startswith("# Python SDK: positions")
        assert "## See Also" in result
        assert "- buy: Open a long position sized in USD" in result

    @pytest.mark.unit
    def test_ambiguous(self, library):
        """Test disambiguation wording for the Python SDK"""
        result = library.python_sdk.get_pattern("position")
        assert result.startswith('Multiple Python SDK patterns found for "position"')

    @pytest.mark.unit
    def test_not_found(self, library):
        """Test the install hint on not found"""
        result = library.python_sdk.get_pattern("xyzzyqwv")
        assert result.startswith('No Python SDK pattern found for "xyzzyqwv"')
        assert "- sell (Trading): Open a short position sized in USD" in result
        assert "Install: pip install agent-trading-sdk" in result


class TestWorkflows:
    """Tests for explain_workflow"""

    @pytest.mark.unit
    def test_single_match_renders(self, library):
        """Test that one keyword resolves to the workflow mentioning it"""
        result = library.workflows.explain("wallet")
        assert result.startswith("# Connect Wallet")
        assert "## Prerequisites\n\n- React app" in result
        assert "1. **Wrap the app in providers**" in result
        assert "```typescript\nawait connect();\n```" in result
        assert "> **Important:** One account per broker" in result
        assert "## Related Workflows\n\n- Place First Order" in result

    @pytest.mark.unit
    def test_wallet_does_not_pull_in_withdraw(self, library):
        """Test that a workflow never mentioning wallets is not offered"""
        assert "Withdraw Funds" not in library.workflows.explain("wallet")

    @pytest.mark.unit
    def test_exact_name(self, library):
        """Test exact workflow names"""
        assert library.workflows.explain("withdraw funds").startswith("# Withdraw Funds")
        assert library.workflows.explain("connect-wallet").startswith("# Connect Wallet")

    @pytest.mark.unit
    def test_ambiguous(self, library):
        """Test that a shared keyword lists candidates with step counts"""
        result = library.workflows.explain("account")
        assert result.startswith('Multiple workflows found for "account"')
        assert "**Connect Wallet** (4 steps)" in result
        assert "**Withdraw Funds** (2 steps)" in result
        assert "Please use the exact workflow name from the list above." in result

    @pytest.mark.unit
    def test_not_found(self, library):
        """Test the not-found message lists every workflow"""
        result = library.workflows.explain("xyzzyqwv")
        assert result == (
            'Workflow "xyzzyqwv" not found.\n\n'
            "Available workflows: Connect Wallet, Withdraw Funds, Place First Order"
        )


class TestComponentGuides:
    """Tests for get_component_guide"""

    @pytest.mark.unit
    def test_standard_variant(self, library):
        """Test the default complexity"""
        result = library.components.get_guide("OrderEntry")
        assert result.startswith("# Building a OrderEntry")
        assert "npm install @orderly.network/hooks" in result
        assert "- `useOrderEntry`" in result
        assert "## Standard Implementation" in result
        assert "### Additional Imports" in result
        assert "## Common Mistakes to Avoid" in result

    @pytest.mark.unit
    def test_requested_variant(self, library):
        """Test choosing a specific complexity"""
        result = library.components.get_guide("OrderEntry", complexity="minimal")
        assert "## Minimal Implementation" in result
        assert "<MinimalOrderEntry />" in result
        assert "<StandardOrderEntry />" not in result

    @pytest.mark.unit
    def test_missing_variant_falls_back_to_standard(self, library):
        """Test that an unavailable complexity uses the standard variant"""
        result = library.components.get_guide("OrderEntry", complexity="advanced")
        assert "## Standard Implementation" in result

    @pytest.mark.unit
    def test_hyphenated_name(self, library):
        """Test that separators do not matter for exact names"""
        assert library.components.get_guide("order-entry").startswith("# Building a OrderEntry")

    @pytest.mark.unit
    def test_ambiguous(self, library):
        """Test candidate list for components"""
        result = library.components.get_guide("order")
        assert result.startswith('Multiple components found for "order"')
        assert "**OrderEntry** (useOrderEntry)" in result
        assert "**Orderbook** (useOrderbookStream)" in result

    @pytest.mark.unit
    def test_not_found(self, library):
        """Test the not-found message"""
        result = library.components.get_guide("xyzzyqwv")
        assert result.startswith('Component "xyzzyqwv" not found.')
        assert "Available components: OrderEntry, Orderbook" in result
