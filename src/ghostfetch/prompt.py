"""Shell prompt theme detection.

Starship and Powerlevel10k can both be wired into the same rc file. Both
initialisers run, but whichever runs later owns the prompt, so the later
activation line is reported first.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .context import SystemContext

logger = logging.getLogger(__name__)

STARSHIP_MARKER = "starship init"
P10K_SOURCE_MARKERS = ("source ~/.p10k.zsh", "source $HOME/.p10k.zsh", "source ${HOME}/.p10k.zsh")
OMZ_MARKERS = ("oh-my-zsh", "ohmyzsh")
OMZ_THEME_KEY = "ZSH_THEME="
OMZ_P10K_THEME = "powerlevel10k/powerlevel10k"
ZSH_FRAMEWORKS = (("zinit", "Zinit"), ("antigen", "Antigen"), ("zplug", "Zplug"))


@dataclass(slots=True)
class RcFiles:
    zshrc: str | None
    bashrc: str | None

    @classmethod
    def load(cls, ctx: SystemContext) -> "RcFiles":
        return cls(
            zshrc=ctx.probe.read_text(ctx.home_path(".zshrc")),
            bashrc=ctx.probe.read_text(ctx.home_path(".bashrc")),
        )

    def contains(self, marker: str) -> bool:
        return any(marker in rc for rc in (self.zshrc, self.bashrc) if rc)


def _find_first(content: str, markers: tuple[str, ...]) -> int | None:
    for marker in markers:
        position = content.find(marker)
        if position >= 0:
            return position
    return None


def order_starship_p10k(zshrc: str | None) -> str:
    """Rank Starship and Powerlevel10k by where they are activated in ``.zshrc``."""
    if zshrc:
        starship = zshrc.find(STARSHIP_MARKER)
        p10k = _find_first(zshrc, P10K_SOURCE_MARKERS)
        if starship >= 0 and p10k is not None:
            if p10k > starship:
                return "Powerlevel10k, Starship"
            return "Starship, Powerlevel10k"
    return "Starship, Powerlevel10k"


def _omz_theme(zshrc: str) -> str:
    for line in zshrc.splitlines():
        line = line.strip()
        if not line.startswith(OMZ_THEME_KEY):
            continue
        theme = line[len(OMZ_THEME_KEY) :].strip().strip('"').strip("'")
        if theme == OMZ_P10K_THEME:
            return "Powerlevel10k (OMZ)"
        return f"Oh My Zsh ({theme})"
    return "Oh My Zsh"


def _framework_theme(ctx: SystemContext, shell: str, rc: RcFiles) -> str | None:
    if "zsh" in shell and rc.zshrc:
        if any(marker in rc.zshrc for marker in OMZ_MARKERS):
            return _omz_theme(rc.zshrc)
        for marker, label in ZSH_FRAMEWORKS:
            if marker in rc.zshrc:
                return label
    if "bash" in shell and ctx.probe.exists(ctx.home_path(".bash_it")):
        return "Bash-it"
    if "fish" in shell:
        if ctx.probe.exists(ctx.home_path(".config", "fish", "functions", "fish_prompt.fish")):
            return "Fish (custom)"
        if ctx.probe.exists(ctx.home_path(".local", "share", "omf")):
            return "Oh My Fish"
    return None


def resolve_shell_theme(ctx: SystemContext) -> str | None:
    shell = ctx.getenv("SHELL")
    if not shell:
        return None
    rc = RcFiles.load(ctx)
    has_starship = rc.contains(STARSHIP_MARKER)
    has_p10k = ctx.probe.exists(ctx.home_path(".p10k.zsh"))

    if has_starship and has_p10k:
        return order_starship_p10k(rc.zshrc)
    if has_starship:
        return "Starship"
    if has_p10k:
        return "Powerlevel10k"
    return _framework_theme(ctx, shell, rc)
