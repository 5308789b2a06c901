"""
L0 Data — the ordered dependency registry.

Order matters: the package-manager bootstrap (Homebrew on macOS) must come
before everything that is installed through it. ``build_registry`` enforces
that.

Install maps are keyed by package manager family. ``_default`` is the
manager-independent fallback (a release binary download) used where no
distro package is reliably available. Command tokens may contain the
placeholders ``{os}``, ``{arch}``, ``{uname_os}`` and ``{uname_arch}``;
the resolver fills them from the detected platform.
"""

from __future__ import annotations

from dockside_installer.core.models.dependency import DependencySpec
from dockside_installer.core.models.platform import OSFamily
from dockside_installer.core.services.provision.data.constants import HOMEBREW_PREFIXES

_HOMEBREW_INSTALL = (
    '/bin/bash -c "$(curl -fsSL '
    'https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh)"'
)

_COLIMA_BINARY = (
    "curl -fsSL -o /tmp/colima "
    "https://github.com/abiosoft/colima/releases/latest/download/"
    "colima-{uname_os}-{uname_arch}"
    " && install -m 0755 /tmp/colima /usr/local/bin/colima"
    " && rm -f /tmp/colima"
)

_KUBECTL_BINARY = (
    "curl -fsSL -o /tmp/kubectl "
    '"https://dl.k8s.io/release/$(curl -fsSL https://dl.k8s.io/release/stable.txt)'
    '/bin/{os}/{arch}/kubectl"'
    " && install -m 0755 /tmp/kubectl /usr/local/bin/kubectl"
    " && rm -f /tmp/kubectl"
)

_ROOT_PMS = {"apt": True, "dnf": True, "yum": True, "pacman": True, "zypper": True, "apk": True}


HOMEBREW = DependencySpec(
    name="homebrew",
    label="Homebrew",
    binary="brew",
    search_paths=list(HOMEBREW_PREFIXES),
    install={"_default": ["/bin/bash", "-c", _HOMEBREW_INSTALL]},
    unattended_env={"NONINTERACTIVE": "1"},
    bootstrap=True,
    platforms=[OSFamily.MACOS],
)

DOCKER = DependencySpec(
    name="docker",
    label="Docker CLI",
    binary="docker",
    install={
        "brew": ["brew", "install", "docker", "docker-compose"],
        "apt": ["apt-get", "install", "-y", "docker.io"],
        "dnf": ["dnf", "install", "-y", "docker"],
        "yum": ["yum", "install", "-y", "docker"],
        "pacman": ["pacman", "-S", "--noconfirm", "docker"],
        "zypper": ["zypper", "install", "-y", "docker"],
        "apk": ["apk", "add", "docker-cli"],
    },
    needs_sudo=dict(_ROOT_PMS),
)

COLIMA = DependencySpec(
    name="colima",
    label="Colima",
    binary="colima",
    install={
        "brew": ["brew", "install", "colima"],
        "_default": ["bash", "-c", _COLIMA_BINARY],
    },
    needs_sudo={"_default": True},
)

KUBECTL = DependencySpec(
    name="kubectl",
    label="kubectl",
    binary="kubectl",
    # apt and zypper need an extra Kubernetes repo; they use the binary download
    install={
        "brew": ["brew", "install", "kubernetes-cli"],
        "dnf": ["dnf", "install", "-y", "kubernetes-client"],
        "pacman": ["pacman", "-S", "--noconfirm", "kubectl"],
        "apk": ["apk", "add", "kubectl"],
        "_default": ["bash", "-c", _KUBECTL_BINARY],
    },
    needs_sudo={"dnf": True, "pacman": True, "apk": True, "_default": True},
)


def build_registry(specs: list[DependencySpec]) -> list[DependencySpec]:
    """Validate ordering and return the registry.

    Raises:
        ValueError: If a bootstrap spec follows a regular one, or names repeat.
    """
    seen: set[str] = set()
    regular_seen = False
    for spec in specs:
        if spec.name in seen:
            raise ValueError(f"Duplicate dependency '{spec.name}' in registry")
        seen.add(spec.name)
        if spec.bootstrap and regular_seen:
            raise ValueError(
                f"Bootstrap dependency '{spec.name}' must precede all other dependencies"
            )
        if not spec.bootstrap:
            regular_seen = True
    return list(specs)


DEPENDENCIES: list[DependencySpec] = build_registry([HOMEBREW, DOCKER, COLIMA, KUBECTL])
