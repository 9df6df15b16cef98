"""A/B test definitions. Each test names a feature flag and its variants."""

CONTROL_VARIANT = "control"

LANDING_PAGE_HERO = {
    "flag_name": "landing-page-hero",
    "variants": [CONTROL_VARIANT, "test-a"],
}

AB_TESTS = {
    "LANDING_PAGE_HERO": LANDING_PAGE_HERO,
}
