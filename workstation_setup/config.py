from __future__ import annotations

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

DEFAULTS_PATH = Path(__file__).resolve().parent / "manifests" / "defaults.yaml"


@dataclass(frozen=True)
class Setting:
    description: str
    argv: List[str]
    root: bool = False


@dataclass(frozen=True)
class FontAsset:
    file: str
    name: str


@dataclass(frozen=True)
class FirefoxProfile:
    name: str
    user_js: bool = True


def load_yaml(path: Path) -> Dict[str, Any]:
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping/object")
    return data


def merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge mappings; anything else in override replaces base."""
    out = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = merge(out[key], value)
        else:
            out[key] = copy.deepcopy(value)
    return out


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    return raw.get(name) or {}


@dataclass(frozen=True)
class SetupConfig:
    raw: Dict[str, Any]

    @property
    def source_dir(self) -> Optional[str]:
        return _section(self.raw, "paths").get("source_dir")

    @property
    def home(self) -> Optional[str]:
        return _section(self.raw, "paths").get("home")

    @property
    def temp_dir(self) -> Path:
        return Path(str(_section(self.raw, "paths").get("temp_dir") or "/tmp/SETUP"))

    @property
    def program_list(self) -> Path:
        return Path(str(_section(self.raw, "paths").get("program_list") or "program_list.txt"))

    @property
    def font_install_dir(self) -> str:
        return str(_section(self.raw, "paths").get("font_install_dir") or "/usr/local/share/fonts/")

    @property
    def error_log(self) -> str:
        return str(_section(self.raw, "logging").get("error_log") or "error_log.txt")

    @property
    def use_sudo(self) -> bool:
        return bool(self.raw.get("use_sudo", True))

    @property
    def settings(self) -> List[Setting]:
        items = self.raw.get("settings") or []
        if not isinstance(items, list):
            raise ValueError("settings must be a list of {description, argv} entries")
        out: List[Setting] = []
        for item in items:
            if not isinstance(item, dict) or "description" not in item or "argv" not in item:
                raise ValueError(f"Invalid setting entry: {item!r}")
            argv = item["argv"]
            if not isinstance(argv, list) or not argv:
                raise ValueError(f"Setting {item['description']!r}: argv must be a non-empty list")
            out.append(
                Setting(
                    description=str(item["description"]),
                    argv=[str(a) for a in argv],
                    root=bool(item.get("root", False)),
                )
            )
        return out

    @property
    def font_release_api(self) -> str:
        return str(_section(self.raw, "fonts").get("release_api") or "")

    @property
    def fonts(self) -> List[FontAsset]:
        assets = _section(self.raw, "fonts").get("assets") or []
        out: List[FontAsset] = []
        for a in assets:
            if not isinstance(a, dict) or not a.get("file") or not a.get("name"):
                raise ValueError(f"Invalid font asset entry: {a!r}")
            out.append(FontAsset(file=str(a["file"]), name=str(a["name"])))
        return out

    @property
    def theme_script_url(self) -> str:
        return str(_section(self.raw, "terminal_theme").get("script_url") or "")

    @property
    def mpv_placeholder(self) -> str:
        return str(_section(self.raw, "mpv").get("placeholder") or "__YT_DLP_PATH__")

    @property
    def yt_dlp_url(self) -> str:
        return str(_section(self.raw, "yt_dlp").get("url") or "")

    @property
    def virtualenv_path(self) -> str:
        return str(_section(self.raw, "virtualenv").get("path") or "myenv")

    @property
    def virtualenv_packages(self) -> List[str]:
        return [str(p) for p in (_section(self.raw, "virtualenv").get("packages") or [])]

    @property
    def firefox_profiles(self) -> List[FirefoxProfile]:
        out: List[FirefoxProfile] = []
        for p in _section(self.raw, "firefox").get("profiles") or []:
            if isinstance(p, dict):
                if not p.get("name"):
                    raise ValueError(f"Firefox profile entry needs a name: {p!r}")
                out.append(FirefoxProfile(name=str(p["name"]), user_js=bool(p.get("user_js", True))))
            else:
                out.append(FirefoxProfile(name=str(p)))
        return out

    @property
    def firefox_profiles_dir(self) -> str:
        return str(_section(self.raw, "firefox").get("profiles_dir") or "snap/firefox/common/.mozilla/firefox")

    @property
    def firefox_user_js_url(self) -> str:
        return str(_section(self.raw, "firefox").get("user_js_url") or "")

    @property
    def firefox_desktop_file(self) -> str:
        return str(
            _section(self.raw, "firefox").get("desktop_file")
            or "/var/lib/snapd/desktop/applications/firefox_firefox.desktop"
        )

    def validate(self) -> None:
        """Parse every structured section so mistakes surface before any step runs."""
        _ = (self.settings, self.fonts, self.firefox_profiles)


def load_setup_config(path: Optional[str] = None) -> SetupConfig:
    """Load bundled defaults, then merge the user's YAML over them."""

    raw = load_yaml(DEFAULTS_PATH)
    if path is not None:
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(path)
        if p.suffix.lower() not in {".yaml", ".yml"}:
            raise ValueError("setup config must be YAML")
        raw = merge(raw, load_yaml(p))
    return SetupConfig(raw=raw)
