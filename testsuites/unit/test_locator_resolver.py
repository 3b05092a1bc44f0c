import pytest

from testsuites.unit.fakes import DriverFault, messages_at
from webverify.framework.calling_information import LocatorStrategy
from webverify.framework.element import FoundElement, NotFoundElement
from webverify.framework.locator_resolver import CASCADE_ORDER, LocatorResolver, build_class_selector


pytestmark = pytest.mark.locator


@pytest.fixture
def find(driver) -> LocatorResolver:
    return LocatorResolver(driver)


@pytest.mark.P0
@pytest.mark.parametrize(
    "locator, expected_strategy",
    [
        ("#submit", LocatorStrategy.CSS),
        ("button", LocatorStrategy.CSS),      # tag wins over div#button
        ("submit", LocatorStrategy.ID),
        ("menu", LocatorStrategy.ID),         # id wins over ul.menu
        ("primary", LocatorStrategy.CLASS),
        ("Saved", LocatorStrategy.TEXT),
        ("Submit Now", LocatorStrategy.TEXT),
        ("Subm", LocatorStrategy.PARTIAL_TEXT),
    ],
)
def test_first_matching_strategy_wins(find, locator, expected_strategy):
    element = find.element(locator)

    assert element.is_initialized
    assert element.info.strategy == expected_strategy
    assert element.info.locator_string == locator


def test_cascade_stops_at_first_non_empty_strategy(find, driver):
    find.elements("primary")

    assert driver.strategies_tried == [
        LocatorStrategy.CSS,
        LocatorStrategy.ID,
        LocatorStrategy.CLASS,
    ]


def test_cascade_order_constant():
    assert CASCADE_ORDER == (
        LocatorStrategy.CSS,
        LocatorStrategy.ID,
        LocatorStrategy.CLASS,
        LocatorStrategy.TEXT,
        LocatorStrategy.PARTIAL_TEXT,
    )


def test_whitespace_locator_never_uses_class_strategy(find, driver):
    elements = find.elements("btn primary")

    assert elements == []
    assert LocatorStrategy.CLASS not in driver.strategies_tried
    assert driver.strategies_tried == [
        LocatorStrategy.CSS,
        LocatorStrategy.ID,
        LocatorStrategy.TEXT,
        LocatorStrategy.PARTIAL_TEXT,
    ]


def test_tab_counts_as_whitespace(find, driver):
    find.elements("btn\tprimary")

    assert LocatorStrategy.CLASS not in driver.strategies_tried


@pytest.mark.P0
def test_missing_element_is_not_an_error(find, log_records):
    element = find.element("does-not-exist")

    assert isinstance(element, NotFoundElement)
    assert element.is_initialized is False
    assert element.info.strategy == LocatorStrategy.UNDEFINED
    assert element.info.locator_string == "does-not-exist"
    assert find.elements("does-not-exist") == []
    assert any("does-not-exist" in m for m in messages_at(log_records, "WARNING"))


def test_empty_locator_returns_nothing_without_querying(find, driver):
    assert find.elements("   ") == []
    assert driver.queries == []


@pytest.mark.smoke
def test_end_to_end_scenario(find):
    assert find.element("#submit").info.strategy == LocatorStrategy.CSS
    assert find.element("Submit Now").info.strategy == LocatorStrategy.TEXT

    partial = find.elements("Subm")
    assert len(partial) == 4
    assert all(e.info.strategy == LocatorStrategy.PARTIAL_TEXT for e in partial)
    assert [e.text for e in partial] == ["Submit Now", "Submarine", "Submerge", "Submission"]


def test_resolution_is_idempotent(find):
    first = find.element("primary")
    second = find.element("primary")

    assert first.info == second.info
    assert first.handle is second.handle


def test_calling_method_is_stamped_by_operation(find):
    assert find.element("#submit").info.calling_method == "element"
    assert find.elements("#submit")[0].info.calling_method == "elements"
    assert find.element("#submit", calling_method="login_step").info.calling_method == "login_step"


# ================================================================================
# Class and descendant helpers
# ================================================================================

def test_build_class_selector():
    assert build_class_selector("btn primary") == ".btn.primary"
    assert build_class_selector("  link   current ") == ".link.current"
    assert build_class_selector("") == ""


def test_element_by_classes_requires_all_classes(find):
    element = find.element_by_classes("link current")

    assert element.text == "Submission"
    assert element.info.strategy == LocatorStrategy.CSS
    assert element.info.locator_string == ".link.current"
    assert element.info.calling_method == "element_by_classes"


def test_elements_by_classes(find):
    assert len(find.elements_by_classes("link")) == 3
    assert len(find.elements_by_classes("btn primary")) == 1
    assert find.elements_by_classes("btn current") == []


def test_descendant_css(find):
    assert len(find.elements_by_descendant_css("#menu .item a")) == 3
    assert find.element_by_descendant_css("form .btn").text == "Submit Now"


# ================================================================================
# Parent / child composition
# ================================================================================

def test_child_elements_are_scoped_to_parent(find):
    children = find.child_elements("#menu", "Subm")

    assert len(children) == 3
    assert "Submit Now" not in [c.text for c in children]
    assert all(c.info.strategy == LocatorStrategy.PARTIAL_TEXT for c in children)


def test_child_element_accepts_resolved_parent(find):
    form = find.element("#login")
    child = find.child_element(form, "Submit Now")

    assert isinstance(child, FoundElement)
    assert child.info.strategy == LocatorStrategy.TEXT
    assert child.info.calling_method == "child_element"
    assert find.child_elements(form, "Submit Now")[0].info.calling_method == "child_elements"


def test_child_of_missing_parent_propagates_absence(find, driver):
    assert find.child_elements("#nope", "a") == []

    child = find.child_element("#nope", "a")
    assert isinstance(child, NotFoundElement)
    assert child.info.strategy == LocatorStrategy.UNDEFINED


def test_child_not_found_inside_parent(find):
    assert isinstance(find.child_element("#login", "Submarine"), NotFoundElement)


# ================================================================================
# Faults and reporting
# ================================================================================

def test_driver_faults_propagate(find, driver):
    driver.fault = "session deleted"

    with pytest.raises(DriverFault, match="session deleted"):
        find.element("#submit")


def test_strategy_report_lists_text_matches(find):
    find.element("#submit")
    assert "All locators resolved by markup" in find.get_strategy_report()

    find.element("Saved")
    report = find.get_strategy_report()
    assert "[Saved]" in report
    assert "text" in report
    assert "#submit" not in report


def test_last_resolution(find):
    assert find.last_resolution("primary") is None
    find.element("primary")
    assert find.last_resolution("primary").strategy == LocatorStrategy.CLASS


def test_last_resolution_is_cleared_by_a_miss(find):
    find.element("Submarine")
    assert find.last_resolution("Submarine").strategy == LocatorStrategy.TEXT

    find.child_element("#login", "Submarine")

    assert find.last_resolution("Submarine") is None
