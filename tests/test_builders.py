"""Tests for the per-entity builders and import classification."""

import pytest

from ngscope_cli.builders import (
    build_component,
    build_dependencies,
    build_module,
    build_service,
    pascal_case,
    split_import_names,
)
from ngscope_cli.classify import classify_file, classify_import
from ngscope_cli.models import FileKind, ImportKind, UnitKind


# ===================================================================
# Naming
# ===================================================================

@pytest.mark.parametrize(
    "stem,expected",
    [
        ("login-form", "LoginForm"),
        ("user_profile-card", "UserProfileCard"),
        ("app", "App"),
        ("", ""),
    ],
)
def test_pascal_case(stem, expected):
    assert pascal_case(stem) == expected


def test_component_name_synthesized_from_stem():
    """Without an exported class the name comes from the file stem."""
    unit = build_component("src/app/login-form.component.ts", "@Component({ selector: 'app-login' })")
    assert unit.name == "LoginFormComponent"
    assert unit.kind == UnitKind.COMPONENT
    assert unit.selector == "app-login"


def test_component_with_empty_stem():
    unit = build_component(".component.ts", "")
    assert unit.name == "Component"


def test_component_declared_class_wins():
    text = "@Component({ selector: 'x-y' })\nexport class FancyWidget {}"
    unit = build_component("src/widget.component.ts", text, template_path="src/widget.component.html",
                           style_paths=["src/widget.component.scss"])
    assert unit.name == "FancyWidget"
    assert unit.template_path == "src/widget.component.html"
    assert unit.style_paths == ["src/widget.component.scss"]
    assert unit.test_path is None


def test_service_builder():
    text = "@Injectable({\n  providedIn: 'root'\n})\nexport class ApiService {}"
    unit = build_service("src/api.service.ts", text, test_path="src/api.service.spec.ts")
    assert unit.name == "ApiService"
    assert unit.kind == UnitKind.SERVICE
    assert unit.injectable_scope == "root"
    assert unit.selector is None
    assert unit.test_path == "src/api.service.spec.ts"


def test_service_name_synthesized():
    assert build_service("data-store.service.ts", "").name == "DataStoreService"


def test_module_builder(module_source):
    module = build_module("src/dashboard/dashboard.module.ts", module_source)
    assert module.name == "DashboardModule"
    assert module.declarations == ["DashboardComponent", "ChartComponent", "DashboardComponent"]
    assert module.imports == ["SharedModule", "RouterModule"]
    assert module.exports == []
    assert module.providers == ["provide", "ChartService"]
    assert module.bootstrap == []


def test_module_name_synthesized():
    assert build_module("shared-ui.module.ts", "@NgModule({})").name == "SharedUiModule"


# ===================================================================
# Dependencies
# ===================================================================

def test_dependency_edges_classified_by_suffix():
    edges = build_dependencies("a.ts", "import { Foo, BarService } from './x';")
    assert [(e.target, e.name, e.import_kind) for e in edges] == [
        ("./x", "Foo", ImportKind.OTHER),
        ("./x", "BarService", ImportKind.SERVICE),
    ]
    assert all(e.source == "a.ts" for e in edges)


def test_dependency_alias_classified_by_exported_name():
    edges = build_dependencies("a.ts", "import { AuthGuard as Guarded } from './auth';")
    assert len(edges) == 1
    assert edges[0].name == "AuthGuard"
    assert edges[0].alias == "Guarded"
    assert edges[0].import_kind == ImportKind.GUARD


def test_dependency_multiline_import_and_type_prefix():
    text = """import {
  User,
  type UserModel,
} from "../models/user.model";
import * as fromStore from './store';
import './polyfills';
"""
    edges = build_dependencies("b.ts", text)
    assert [(e.name, e.import_kind) for e in edges] == [
        ("User", ImportKind.OTHER),
        ("UserModel", ImportKind.MODEL),
    ]
    assert edges[0].target == "../models/user.model"


def test_dependency_no_imports():
    assert build_dependencies("c.ts", "export const x = 1;") == []


def test_split_import_names():
    assert split_import_names(" A , B as C ,, type D as E ") == [("A", None), ("B", "C"), ("D", "E")]


@pytest.mark.parametrize(
    "name,kind",
    [
        ("HeaderComponent", ImportKind.COMPONENT),
        ("HttpClient", ImportKind.OTHER),
        ("UserService", ImportKind.SERVICE),
        ("AppModule", ImportKind.MODULE),
        ("HighlightDirective", ImportKind.DIRECTIVE),
        ("DatePipe", ImportKind.PIPE),
        ("AuthGuard", ImportKind.GUARD),
        ("UserResolver", ImportKind.RESOLVER),
        ("UserModel", ImportKind.MODEL),
        ("UserInterface", ImportKind.MODEL),
        ("Component", ImportKind.COMPONENT),
    ],
)
def test_classify_import(name, kind):
    assert classify_import(name) == kind


@pytest.mark.parametrize(
    "path,kind",
    [
        ("src/app/app.component.ts", FileKind.COMPONENT),
        ("src/app/app.component.spec.ts", FileKind.TEST),
        ("src/app/app.component.html", FileKind.TEMPLATE),
        ("src/app/app.component.scss", FileKind.STYLE),
        ("src/app/user.service.ts", FileKind.SERVICE),
        ("src/app/app.module.ts", FileKind.MODULE),
        ("src/app/user.model.ts", FileKind.MODEL),
        ("src/app/auth.guard.ts", FileKind.GUARD),
        ("src/app/store/user.actions.ts", FileKind.NGRX_ACTION),
        ("src/app/store/user.reducer.ts", FileKind.NGRX_REDUCER),
        ("angular.json", FileKind.CONFIG),
        ("src/main.ts", FileKind.OTHER),
    ],
)
def test_classify_file(path, kind):
    assert classify_file(path) == kind
