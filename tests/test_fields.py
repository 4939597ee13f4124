"""Tests for pattern-based field lookups."""

from ngscope_cli import fields


def test_list_field_keeps_order_and_duplicates(module_source):
    assert fields.list_field(module_source, "declarations") == [
        "DashboardComponent",
        "ChartComponent",
        "DashboardComponent",
    ]


def test_list_field_nested_items_contribute_leading_identifier(module_source):
    """Call expressions and object literals count as one item each."""
    assert fields.list_field(module_source, "imports") == ["SharedModule", "RouterModule"]
    assert fields.list_field(module_source, "providers") == ["provide", "ChartService"]


def test_list_field_empty_and_absent_are_both_empty(module_source):
    assert fields.list_field(module_source, "exports") == []
    assert fields.list_field(module_source, "bootstrap") == []


def test_list_field_is_idempotent(module_source):
    """Looking up a list rebuilt from a previous result gives the same names."""
    for text in (
        module_source,
        "imports: [Foo, Bar.forRoot({x: 1}), { provide: TOKEN, useValue: [1, 2] }, Foo]",
    ):
        first = fields.list_field(text, "imports")
        assert fields.list_field(f"imports: [{', '.join(first)}]", "imports") == first
    assert first == ["Foo", "Bar", "provide", "Foo"]


def test_list_field_skips_items_without_identifier():
    assert fields.list_field("items: [ 'a-b', Foo, ' ' ]", "items") == ["a", "Foo"]
    assert fields.list_field("items: [ ..., Foo ]", "items") == ["Foo"]


def test_list_field_first_occurrence_wins():
    text = "declarations: [A], declarations: [B]"
    assert fields.list_field(text, "declarations") == ["A"]


def test_list_field_unterminated_array():
    assert fields.list_field("declarations: [A, B", "declarations") == []


def test_field_name_must_not_be_identifier_tail():
    text = "xpath: 'wrong', path: 'right'"
    assert fields.string_field(text, "path") == "right"


def test_string_field_accepts_all_quote_styles():
    assert fields.string_field("selector: 'app-a'", "selector") == "app-a"
    assert fields.string_field('selector: "app-b"', "selector") == "app-b"
    assert fields.string_field("selector: `app-c`", "selector") == "app-c"


def test_string_field_absent():
    assert fields.string_field("template: '<p></p>'", "selector") is None


def test_identifier_field():
    assert fields.identifier_field("{ path: 'a', component: FooComponent }", "component") == "FooComponent"
    assert fields.identifier_field("{ path: 'a' }", "component") is None


def test_class_name_requires_export():
    assert fields.class_name("export class UserService {}") == "UserService"
    assert fields.class_name("class Hidden {}") is None


def test_selector_and_injectable_scope():
    component = "@Component({\n  selector: 'app-root',\n  templateUrl: './app.component.html'\n})"
    service = "@Injectable({ providedIn: 'root' })\nexport class ApiService {}"
    assert fields.selector(component) == "app-root"
    assert fields.injectable_scope(service) == "root"
    assert fields.injectable_scope("@Injectable()\nexport class ApiService {}") is None


def test_array_interior():
    assert fields.array_interior("imports: [A, B([C])]", "imports") == "A, B([C])"
    assert fields.array_interior("imports: A", "imports") is None
