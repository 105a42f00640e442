"""
Tests for per-kind bonuses and the B2B service vocabulary.
"""
from core.config_loader import ScoringConfig
from core.scorer.kind_bonus import (
    SERVICE_VOCABULARY,
    capability_points,
    extract_service_terms,
    matched_capabilities,
)
from tests.mocks.business_mocks import make_business

CONFIG = ScoringConfig()


class TestServiceVocabulary:

    def test_vocabulary_has_eighteen_terms(self):
        assert len(SERVICE_VOCABULARY) == 18
        assert len(set(SERVICE_VOCABULARY)) == 18

    def test_extract_terms_case_insensitive_in_vocabulary_order(self):
        terms = extract_service_terms("Need Computer Vision and some AUTOMATION")
        assert terms == ['automation', 'computer vision']

    def test_extract_terms_empty(self):
        assert extract_service_terms("") == []
        assert extract_service_terms(None) == []

    def test_multiword_terms_also_match_their_parts(self):
        # "speech recognition" contains "recognition"
        assert extract_service_terms("speech recognition") == ['recognition', 'speech recognition']


class TestCapabilityPoints:

    def test_capabilities_cover_description_category_tags_certifications(self):
        business = make_business(
            description="We build chatbot products",
            category="Robotics",
            tags=["Analytics"],
            certifications=["Deep Learning Specialist"],
        )
        terms = ['chatbot', 'robotics', 'analytics', 'deep learning', 'prediction']
        assert matched_capabilities(business, terms) == ['chatbot', 'robotics', 'analytics', 'deep learning']

    def test_points_proportional_to_full_vocabulary(self):
        business = make_business(tags=["automation", "analytics", "robotics"])
        points = capability_points(business, "automation analytics robotics", CONFIG)
        assert points == CONFIG.capability_max_points * 3 / 18

    def test_no_terms_in_request(self):
        business = make_business(tags=["automation"])
        assert capability_points(business, "a great partner", CONFIG) == 0

    def test_all_terms_matched_gives_full_points(self):
        text = " ".join(SERVICE_VOCABULARY)
        business = make_business(description=text)
        assert capability_points(business, text, CONFIG) == CONFIG.capability_max_points
