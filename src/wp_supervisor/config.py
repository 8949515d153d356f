"""Configuration management for wp-supervisor site profiles and settings."""

import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

import keyring
import yaml
from keyring.errors import KeyringError

from wp_supervisor.connector.ssh import SSHConfig
from wp_supervisor.engine.requirements import DEFAULT_API_URL, DEFAULT_TIMEOUT
from wp_supervisor.storage.transients import DAY_IN_SECONDS, WEEK_IN_SECONDS

logger = logging.getLogger(__name__)

# Profile name that always means "this machine"
LOCAL_PROFILE = "local"

_KEYRING_REF = "__keyring__"


@dataclass
class SiteProfile:
    """A WordPress site and how to reach the host it runs on."""

    name: str
    ssh: SSHConfig | None = None  # None inspects the local machine
    wp_path: str = "/var/www/html"
    site_url: str = ""
    server_software: str | None = None  # Skip detection, e.g. "LiteSpeed"

    @property
    def is_local(self) -> bool:
        return self.ssh is None

    @property
    def resolved_site_url(self) -> str:
        """Site URL, defaulting to the SSH host (or localhost)."""
        if self.site_url:
            return self.site_url
        if self.ssh:
            return f"http://{self.ssh.host}"
        return "http://localhost"


@dataclass
class Settings:
    """Global settings, read from settings.yaml with env overrides."""

    api_url: str = DEFAULT_API_URL
    request_timeout: int = DEFAULT_TIMEOUT
    server_data_ttl: int = DAY_IN_SECONDS
    requirements_ttl: int = WEEK_IN_SECONDS
    cache_path: str | None = None  # Defaults to <config dir>/cache.db
    admin_token: str | None = None  # Required by the dashboard when set


class ConfigManager:
    """Manages site profiles stored in YAML format with secure keyring for passwords."""

    def __init__(self, config_dir: Path | None = None) -> None:
        if config_dir is None:
            env_config = os.getenv("WP_SUPERVISOR_CONFIG")
            if env_config:
                config_dir = Path(env_config).expanduser().resolve()
            else:
                config_dir = Path.home() / ".wp-supervisor"

        self.config_dir = config_dir
        self.profiles_file = config_dir / "profiles.yaml"
        self.settings_file = config_dir / "settings.yaml"
        self._ensure_config_dir()
        self.service_id = "wp-supervisor"

    def _ensure_config_dir(self) -> None:
        """Create config directory if it doesn't exist."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        if not self.profiles_file.exists():
            self._save_profiles({})

    def _load_yaml(self, path: Path) -> dict[str, Any]:
        if not path.exists():
            return {}
        try:
            with open(path, "r") as f:
                return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.warning("Ignoring unreadable %s: %s", path, e)
            return {}

    def _load_profiles(self) -> dict[str, Any]:
        return self._load_yaml(self.profiles_file)

    def _save_profiles(self, profiles: dict[str, Any]) -> None:
        """Save profiles to the YAML file with proper permissions."""
        self.profiles_file.touch(mode=0o600)
        with open(self.profiles_file, "w") as f:
            yaml.safe_dump(profiles, f)

    def add_profile(self, profile: SiteProfile) -> None:
        """Add or update a site profile."""
        profiles = self._load_profiles()

        entry: dict[str, Any] = {
            "wp_path": profile.wp_path,
            "site_url": profile.site_url,
            "server_software": profile.server_software,
            "ssh": None,
        }

        if profile.ssh:
            config = profile.ssh
            password_ref = None
            if config.password:
                try:
                    keyring.set_password(self.service_id, profile.name, config.password)
                    password_ref = _KEYRING_REF
                except KeyringError:
                    # Headless hosts often have no keyring backend
                    logger.warning("No keyring available, storing password for %s in plain text", profile.name)
                    password_ref = config.password

            entry["ssh"] = {
                "host": config.host,
                "user": config.user,
                "port": config.port,
                "key_path": config.key_path,
                "use_sudo": config.use_sudo,
                "password": password_ref,
            }

        profiles[profile.name] = entry
        self._save_profiles(profiles)

    def get_profile(self, name: str) -> SiteProfile | None:
        """Get a SiteProfile by name."""
        data = self._load_profiles().get(name)
        if not data:
            if name == LOCAL_PROFILE:
                return SiteProfile(name=LOCAL_PROFILE)
            return None

        ssh = None
        ssh_data = data.get("ssh")
        if ssh_data:
            password = ssh_data.get("password")
            if password == _KEYRING_REF:
                try:
                    password = keyring.get_password(self.service_id, name)
                except KeyringError:
                    password = None

            ssh = SSHConfig(
                host=ssh_data["host"],
                user=ssh_data.get("user", "root"),
                port=ssh_data.get("port", 22),
                key_path=ssh_data.get("key_path"),
                use_sudo=ssh_data.get("use_sudo", True),
                password=password,
            )

        return SiteProfile(
            name=name,
            ssh=ssh,
            wp_path=data.get("wp_path") or "/var/www/html",
            site_url=data.get("site_url") or "",
            server_software=data.get("server_software"),
        )

    def list_profiles(self) -> dict[str, Any]:
        """List all available profiles."""
        return self._load_profiles()

    def remove_profile(self, name: str) -> bool:
        """Remove a site profile."""
        profiles = self._load_profiles()
        if name not in profiles:
            return False

        ssh_data = profiles[name].get("ssh") or {}
        if ssh_data.get("password") == _KEYRING_REF:
            try:
                keyring.delete_password(self.service_id, name)
            except KeyringError as e:
                logger.debug("Could not remove keyring entry for %s: %s", name, e)

        del profiles[name]
        self._save_profiles(profiles)
        return True

    def load_settings(self) -> Settings:
        """Settings from settings.yaml, then WP_SUPERVISOR_* environment overrides."""
        known = {f.name for f in fields(Settings)}
        data = {k: v for k, v in self._load_yaml(self.settings_file).items() if k in known}
        settings = Settings(**data)

        api_url = os.getenv("WP_SUPERVISOR_API_URL")
        if api_url:
            settings.api_url = api_url
        admin_token = os.getenv("WP_SUPERVISOR_ADMIN_TOKEN")
        if admin_token:
            settings.admin_token = admin_token

        if not settings.cache_path:
            settings.cache_path = str(self.config_dir / "cache.db")
        return settings

    def save_settings(self, settings: Settings) -> None:
        self.settings_file.touch(mode=0o600)
        with open(self.settings_file, "w") as f:
            yaml.safe_dump(asdict(settings), f)
