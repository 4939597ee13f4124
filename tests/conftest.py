"""Pytest configuration and fixtures for ngscope tests."""

import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest


@pytest.fixture(autouse=True)
def _isolated_user_config(tmp_path_factory, monkeypatch):
    """Keep a developer's ~/.ngscope/config.toml out of every test."""
    home = tmp_path_factory.mktemp("ngscope_home")
    monkeypatch.setattr("ngscope_cli.config.BASE_DIR", home)
    monkeypatch.setattr("ngscope_cli.config.USER_CONFIG_FILE", home / "config.toml")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmp = Path(tempfile.mkdtemp())
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def sample_project_path() -> Path:
    """Get path to the sample Angular project."""
    return Path(__file__).parent / "fixtures" / "sample_app"


@pytest.fixture
def angular_project(temp_dir: Path) -> Path:
    """An empty directory that passes the Angular project check."""
    (temp_dir / "angular.json").write_text("{}")
    return temp_dir


@pytest.fixture
def module_source() -> str:
    """NgModule source with multi-line and nested metadata arrays."""
    return '''import { NgModule } from '@angular/core';
import { RouterModule } from '@angular/router';
import { SharedModule } from './shared/shared.module';

@NgModule({
  declarations: [
    DashboardComponent,
    ChartComponent,
    DashboardComponent
  ],
  imports: [SharedModule, RouterModule.forChild([{ path: '', component: DashboardComponent }])],
  exports: [],
  providers: [{ provide: CHART_CONFIG, useValue: { theme: 'dark', sizes: [1, 2] } }, ChartService],
})
export class DashboardModule {}
'''


@pytest.fixture
def routing_source() -> str:
    """Routing module with nested children and both lazy-loading forms."""
    return '''import { Routes } from '@angular/router';

const routes: Routes = [
  { path: 'home', component: HomeComponent },
  {
    path: 'settings',
    component: SettingsComponent,
    children: [
      { path: 'profile', component: ProfileComponent },
      {
        path: 'security',
        children: [
          { path: 'keys', component: KeysComponent },
        ],
      },
    ],
  },
  { path: 'reports', loadChildren: './reports/reports.module#ReportsModule' },
  { path: 'billing', loadChildren: () => import('./billing/billing.module').then(m => m.BillingModule) },
  { redirectTo: 'home', pathMatch: 'full' },
];
'''
