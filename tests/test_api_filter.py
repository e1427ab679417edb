from api_index.src.api_index.api_filter import AnnotationSubstringFilter, is_api_method
from api_index.src.api_index.models.ast_models import Annotation


class TestAnnotationSubstringFilter:

    def test_get_mapping_is_kept(self):
        assert is_api_method([Annotation("GetMapping", '"/x"')])

    def test_deprecated_only_is_rejected(self):
        assert not is_api_method([Annotation("Deprecated")])

    def test_no_annotations_is_rejected(self):
        assert not is_api_method([])

    def test_one_matching_annotation_is_enough(self):
        assert is_api_method([Annotation("Override"), Annotation("PostMapping")])

    def test_match_is_case_sensitive(self):
        assert not is_api_method([Annotation("getmapping")])

    def test_qualified_annotation_names_match(self):
        assert is_api_method([Annotation("org.springframework.web.bind.annotation.RequestMapping")])

    def test_custom_marker(self):
        jaxrs = AnnotationSubstringFilter(marker="Path")
        assert jaxrs([Annotation("Path", '"/users"')])
        assert not jaxrs([Annotation("GetMapping")])
