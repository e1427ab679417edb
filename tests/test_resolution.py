import pytest

from api_index.src.api_index.errors import ResolverConfigurationError
from api_index.src.api_index.resolution import (
    CombinedTypeSource,
    JdkTypeSource,
    SourceRootTypeSource,
    SymbolResolver,
    configure_resolver,
    erase_type,
)


@pytest.fixture
def source_root(write_tree):
    base = write_tree({
        "src/com/acme/model/User.java": "package com.acme.model;\npublic class User {}\n",
        "src/com/acme/web/Page.java": "package com.acme.web;\npublic class Page {}\n",
        "src/com/acme/util/Outer.java": "package com.acme.util;\npublic class Outer { public static class Inner {} }\n",
    })
    return str(base / "src")


@pytest.fixture
def resolver(source_root):
    return SymbolResolver(CombinedTypeSource([JdkTypeSource(), SourceRootTypeSource(source_root)]))


class TestTypeSources:

    def test_jdk_types(self):
        jdk = JdkTypeSource()
        assert jdk.has_type("java.lang.String")
        assert jdk.has_type("java.util.Optional")
        assert not jdk.has_type("com.acme.model.User")

    def test_source_root_finds_files(self, source_root):
        types = SourceRootTypeSource(source_root)
        assert types.has_type("com.acme.model.User")
        assert types.has_type("com.acme.util.Outer.Inner")
        assert not types.has_type("com.acme.model.Order")

    def test_nested_member_must_be_declared(self, source_root):
        types = SourceRootTypeSource(source_root)
        assert not types.has_type("com.acme.util.Outer.Nope")

    def test_source_root_must_be_a_directory(self, tmp_path):
        with pytest.raises(ResolverConfigurationError):
            SourceRootTypeSource(str(tmp_path / "nowhere"))


class TestSymbolResolver:

    def test_explicit_import_wins(self, resolver):
        assert resolver.resolve("User", "com.acme.web", ["com.acme.model.User"]) == "com.acme.model.User"

    def test_same_package(self, resolver):
        assert resolver.resolve("Page", "com.acme.web", []) == "com.acme.web.Page"

    def test_wildcard_import(self, resolver):
        assert resolver.resolve("User", "com.acme.web", ["com.acme.model.*"]) == "com.acme.model.User"

    def test_java_lang_is_implicit(self, resolver):
        assert resolver.resolve("String", "com.acme.web", []) == "java.lang.String"

    def test_generics_and_arrays_are_erased(self, resolver):
        assert resolver.resolve("List<User>", "com.acme.web", ["java.util.List"]) == "java.util.List"
        assert resolver.resolve("User[]", "com.acme.model", []) == "com.acme.model.User"

    def test_nested_type_through_outer_import(self, resolver):
        resolved = resolver.resolve("Outer.Inner", "com.acme.web", ["com.acme.util.Outer"])
        assert resolved == "com.acme.util.Outer.Inner"

    def test_already_qualified(self, resolver):
        assert resolver.resolve("com.acme.model.User", "com.acme.web", []) == "com.acme.model.User"

    def test_primitives_and_unknowns(self, resolver):
        assert resolver.resolve("void", "com.acme.web", []) is None
        assert resolver.resolve("int", "com.acme.web", []) is None
        assert resolver.resolve("Mystery", "com.acme.web", []) is None


def test_erase_type():
    assert erase_type("Map<String, List<User>>") == "Map"
    assert erase_type("@NotNull User") == "User"
    assert erase_type("String...") == "String"


class TestConfigureResolver:

    def test_returns_resolver_aware_parser(self, source_root):
        parser = configure_resolver({source_root})
        assert parser.resolver is not None
        assert parser.resolver.resolve("User", "com.acme.model", []) == "com.acme.model.User"

    def test_bad_root_is_fatal(self, tmp_path):
        with pytest.raises(ResolverConfigurationError):
            configure_resolver({str(tmp_path / "missing")})

    def test_no_roots_still_knows_the_jdk(self):
        parser = configure_resolver(set())
        assert parser.resolver.resolve("Integer") == "java.lang.Integer"


class TestNestedResolution:

    def test_undeclared_member_of_visible_outer_type(self, resolver):
        assert resolver.resolve("Outer.Nope", "com.acme.web", ["com.acme.util.Outer"]) is None

    def test_jdk_nested_type(self, resolver):
        assert resolver.resolve("Map.Entry", "com.acme.web", ["java.util.Map"]) == "java.util.Map.Entry"

    def test_outer_type_known_only_from_import(self, resolver):
        assert resolver.resolve("Foo.Bar", "com.acme.web", ["org.x.Foo"]) == "org.x.Foo.Bar"
