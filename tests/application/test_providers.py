"""Unit tests for the candidate providers."""

from kompl.application.config import CompletionConfig
from kompl.application.context import PythonContextParser
from kompl.application.providers import (
    AttributeProvider,
    CompletionRequest,
    IndexedTypeProvider,
    KeywordProvider,
    ModuleNameProvider,
    ResourceProvider,
    ScopeMemberProvider,
)
from kompl.core.matching import MatchPolicy
from kompl.core.types import CandidateOrigin, MetadataFlag
from kompl.infrastructure.search_path import SymbolIndex


def texts(candidates):
    return {candidate.text for candidate in candidates}


def make_request(prefix, scope=None, snippet=None, **config):
    context = PythonContextParser().parse(snippet) if snippet else None
    return CompletionRequest(prefix=prefix, scope=scope, context=context, config=CompletionConfig(**config))


class TestScopeMemberProvider:
    """Tests for ScopeMemberProvider."""

    def test_fuzzy_members(self, scope_module):
        """Test that each prefix segment may stand for a name segment."""
        candidates = ScopeMemberProvider().get_candidates(make_request("re_me", scope_module))
        assert texts(candidates) == {"remove_method", "reset_meta", "remove_all_methods"}
        assert all(candidate.origin is CandidateOrigin.MEMBER for candidate in candidates)

    def test_boundary_policy(self, scope_module):
        """Test that the boundary policy skips within segments only."""
        request = make_request("remme", scope_module, policy=MatchPolicy.BOUNDARY)
        assert texts(ScopeMemberProvider().get_candidates(request)) == {"remove_method", "remove_all_methods"}

    def test_builtins_without_scope(self):
        """Test that builtins are offered when there is no scope."""
        assert "isinstance" in texts(ScopeMemberProvider().get_candidates(make_request("isinst")))

    def test_private_names_need_underscore(self, scope_module):
        """Test that underscore names only appear for an underscore prefix."""
        provider = ScopeMemberProvider()
        assert "_hidden" not in texts(provider.get_candidates(make_request("hid", scope_module)))
        assert "_hidden" in texts(provider.get_candidates(make_request("_hid", scope_module)))

    def test_qualified_module_alias(self, scope_module):
        """Test members of a module bound under an alias in scope."""
        candidates = texts(ScopeMemberProvider().get_candidates(make_request("os_alias.pa", scope_module)))
        assert "os_alias.path" in candidates
        assert all(text.startswith("os_alias.") for text in candidates)

    def test_qualified_prefix_with_empty_member(self, scope_module):
        """Test that ``module.`` lists every public member."""
        candidates = texts(ScopeMemberProvider().get_candidates(make_request("os_alias.", scope_module)))
        assert {"os_alias.path", "os_alias.getcwd"} <= candidates

    def test_qualified_unknown_module(self, scope_module):
        """Test that an unresolvable qualifier yields nothing."""
        assert ScopeMemberProvider().get_candidates(make_request("nope.pa", scope_module)) == []

    def test_from_import_context(self):
        """Test completing names after ``from os import``."""
        request = make_request("getcw", snippet="from os import __prefix__")
        provider = ScopeMemberProvider()
        assert provider.can_handle(request)
        assert "getcwd" in texts(provider.get_candidates(request))

    def test_metadata(self, scope_module):
        """Test requested metadata on member candidates."""
        request = make_request(
            "remove_m",
            scope_module,
            metadata=frozenset({MetadataFlag.DOC, MetadataFlag.ARITY, MetadataFlag.TYPE}),
        )
        candidates = {candidate.text: candidate for candidate in ScopeMemberProvider().get_candidates(request)}
        candidate = candidates["remove_method"]
        assert candidate.metadata.has_doc is True
        assert candidate.metadata.arity == (1, 2)
        assert candidate.metadata.type_tag == "function"

    def test_skips_attribute_context(self, scope_module):
        """Test that attribute sites are left to the attribute provider."""
        assert not ScopeMemberProvider().can_handle(make_request("st", scope_module, "a_str.__prefix__"))


class TestAttributeProvider:
    """Tests for AttributeProvider."""

    def test_attribute_context(self, scope_module):
        """Test completing members of the object named in the context."""
        request = make_request("st", scope_module, "a_str.__prefix__")
        provider = AttributeProvider()
        assert provider.can_handle(request)
        assert texts(provider.get_candidates(request)) == {"strip", "startswith"}

    def test_qualified_prefix(self, scope_module):
        """Test completing ``obj.attr`` without a context."""
        candidates = AttributeProvider().get_candidates(make_request("a_str.st", scope_module))
        assert texts(candidates) == {"a_str.strip", "a_str.startswith"}
        assert all(candidate.origin is CandidateOrigin.ATTRIBUTE for candidate in candidates)

    def test_modules_left_to_member_provider(self, scope_module):
        """Test that module attributes are not duplicated here."""
        assert AttributeProvider().get_candidates(make_request("os_alias.pa", scope_module)) == []

    def test_unresolvable_target(self, scope_module):
        """Test that an unknown object yields nothing."""
        assert AttributeProvider().get_candidates(make_request("st", scope_module, "missing.__prefix__")) == []

    def test_plain_prefix_not_handled(self, scope_module):
        """Test that unqualified prefixes without context are ignored."""
        assert not AttributeProvider().can_handle(make_request("st", scope_module))


class TestKeywordProvider:
    """Tests for KeywordProvider."""

    def test_keywords(self):
        """Test keyword completion."""
        assert texts(KeywordProvider().get_candidates(make_request("lamb"))) == {"lambda"}

    def test_not_after_qualifier(self):
        """Test that qualified prefixes never produce keywords."""
        assert KeywordProvider().get_candidates(make_request("os.wh")) == []

    def test_not_in_string(self):
        """Test that string sites do not get keywords."""
        assert not KeywordProvider().can_handle(make_request("wh", snippet="'__prefix__'"))


class TestIndexedProviders:
    """Tests for the providers backed by the search-path index."""

    def test_module_names(self, search_tree):
        """Test dotted module completion from the index."""
        provider = ModuleNameProvider(SymbolIndex(search_path=search_tree.roots))
        candidates = provider.get_candidates(make_request("pk.mo"))
        assert "pkg.mod" in texts(candidates)

    def test_module_names_in_import(self, search_tree):
        """Test that import statements are served."""
        provider = ModuleNameProvider(SymbolIndex(search_path=search_tree.roots))
        request = make_request("zp.zm", snippet="import __prefix__")
        assert provider.can_handle(request)
        assert "zpkg.zmod" in texts(provider.get_candidates(request))

    def test_types_by_group(self, search_tree):
        """Test names within the group of the first segment."""
        provider = IndexedTypeProvider(SymbolIndex(search_path=search_tree.roots))
        assert texts(provider.get_candidates(make_request("pkg.st"))) == {"pkg.stub"}

    def test_types_top_level(self, search_tree):
        """Test top-level group names and ungrouped names."""
        provider = IndexedTypeProvider(SymbolIndex(search_path=search_tree.roots))
        assert texts(provider.get_candidates(make_request("zp"))) == {"zpkg"}
        assert texts(provider.get_candidates(make_request("to"))) == {"top"}

    def test_resources_in_string(self, search_tree):
        """Test resource completion inside a string literal."""
        provider = ResourceProvider(SymbolIndex(search_path=search_tree.roots))
        request = make_request("data/co", snippet="open('__prefix__')")
        assert provider.can_handle(request)
        assert texts(provider.get_candidates(request)) == {"data/config.json"}

    def test_resources_outside_string(self, search_tree):
        """Test that resources are not offered in code."""
        provider = ResourceProvider(SymbolIndex(search_path=search_tree.roots))
        assert not provider.can_handle(make_request("data/co"))
