# profile.py
"""Selector profiles: the site-specific candidate tables the engine runs on.

A profile is a YAML document; supporting another portal variant means adding
entries (or a new file), not new code paths.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from .constants import DEFAULT_PROFILE, logger
from .errors import ConfigurationError
from .models import MenuSection

PROFILES_DIR = Path(__file__).parent / "profiles"

Candidates = Tuple[str, ...]


@dataclass(frozen=True)
class InterstitialProfile:
    title: str
    phrase: str
    dismiss: Candidates


@dataclass(frozen=True)
class RotationProfile:
    title_words: Candidates
    password_input: str
    submit: Candidates
    warning_words: Candidates


@dataclass(frozen=True)
class MenuProfile:
    sidebar: Candidates
    toggle: Candidates
    back_label: str
    root_marker: str
    page_tree: str
    page_tree_markers: Candidates
    page_list_markers: Candidates
    sections: Tuple[MenuSection, ...]


@dataclass(frozen=True)
class SelectorProfile:
    name: str
    login_path: str
    direct_login_path: str
    cookie_name: str
    cookie_value: str
    interstitial: InterstitialProfile
    credential_field: Candidates
    identity_field: Candidates
    submit_control: Candidates
    reveal_triggers: Candidates
    failure_phrases: Candidates
    rotation: RotationProfile
    authenticated_signals: Candidates
    menu: MenuProfile


def _section(data: Dict[str, Any], key: str, where: str) -> Dict[str, Any]:
    value = data.get(key)
    if not isinstance(value, dict):
        raise ConfigurationError(f"Selector profile {where}: '{key}' must be a mapping")
    return value


def _text(data: Dict[str, Any], key: str, where: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"Selector profile {where}: '{key}' must be a non-empty string")
    return value.strip()


def _candidates(data: Dict[str, Any], key: str, where: str) -> Candidates:
    value = data.get(key)
    if not isinstance(value, list) or not value or not all(isinstance(v, str) and v for v in value):
        raise ConfigurationError(f"Selector profile {where}: '{key}' must be a non-empty list of strings")
    return tuple(value)


def _menu_sections(raw: Any, where: str) -> Tuple[MenuSection, ...]:
    if not isinstance(raw, list) or not raw:
        raise ConfigurationError(f"Selector profile {where}: 'menu.sections' must be a non-empty list")
    sections = []
    for item in raw:
        if not isinstance(item, dict) or not item.get("name"):
            raise ConfigurationError(f"Selector profile {where}: every menu section needs a 'name'")
        sections.append(MenuSection(name=str(item["name"]), children=tuple(str(c) for c in item.get("children") or ())))
    return tuple(sections)


def parse_profile(data: Any, name: str = "profile") -> SelectorProfile:
    if not isinstance(data, dict):
        raise ConfigurationError(f"Selector profile {name}: top level must be a mapping")

    cookie = _section(data, "cookie_support", name)
    interstitial = _section(data, "interstitial", name)
    rotation = _section(data, "rotation", name)
    menu = _section(data, "menu", name)

    return SelectorProfile(
        name=name,
        login_path=_text(data, "login_path", name),
        direct_login_path=_text(data, "direct_login_path", name),
        cookie_name=_text(cookie, "name", name),
        cookie_value=_text(cookie, "value", name),
        interstitial=InterstitialProfile(
            title=_text(interstitial, "title", name),
            phrase=_text(interstitial, "phrase", name),
            dismiss=_candidates(interstitial, "dismiss", name),
        ),
        credential_field=_candidates(data, "credential_field", name),
        identity_field=_candidates(data, "identity_field", name),
        submit_control=_candidates(data, "submit_control", name),
        reveal_triggers=_candidates(data, "reveal_triggers", name),
        failure_phrases=_candidates(data, "failure_phrases", name),
        rotation=RotationProfile(
            title_words=_candidates(rotation, "title_words", name),
            password_input=_text(rotation, "password_input", name),
            submit=_candidates(rotation, "submit", name),
            warning_words=_candidates(rotation, "warning_words", name),
        ),
        authenticated_signals=_candidates(data, "authenticated_signals", name),
        menu=MenuProfile(
            sidebar=_candidates(menu, "sidebar", name),
            toggle=_candidates(menu, "toggle", name),
            back_label=_text(menu, "back_label", name),
            root_marker=_text(menu, "root_marker", name),
            page_tree=_text(menu, "page_tree", name),
            page_tree_markers=_candidates(menu, "page_tree_markers", name),
            page_list_markers=_candidates(menu, "page_list_markers", name),
            sections=_menu_sections(menu.get("sections"), name),
        ),
    )


def load_profile(path: Optional[Union[str, Path]] = None) -> SelectorProfile:
    """Load a selector profile from a YAML file; the packaged Liferay profile by default."""
    path = Path(path) if path else PROFILES_DIR / f"{DEFAULT_PROFILE}.yaml"
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"Selector profile not found: {path}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Selector profile {path} is not valid YAML: {e}")
    logger.debug(f"Loaded selector profile {path}")
    return parse_profile(data, name=path.stem)
