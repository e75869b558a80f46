"""
Interactive management flows for agskills.

Each flow glues the selection list, the bundle store, the link inspector and
the reconciliation engine together. Nothing is written to disk until the last
selection of a flow has been confirmed; cancelling at any step leaves the
filesystem untouched.
"""

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

import typer
from rich.markup import escape

from agskills.cli.output import (
    print_error,
    print_info,
    print_reconcile_result,
    print_success,
    print_warning,
)
from agskills.config import Config, get_config
from agskills.exceptions import BundleError, InvalidBundleNameError, NoSkillsFoundError
from agskills.skills import (
    Bundle,
    BundleStore,
    ReconcileResult,
    SkillCatalog,
    install_skills,
    list_linked_skills,
    normalize_bundle_name,
    reconcile,
)
from agskills.storage import ensure_agent_target, get_skills_root
from agskills.ui import (
    PromptToolkitTerminal,
    SelectionResult,
    SelectMode,
    Terminal,
    select_items,
)

logger = logging.getLogger(__name__)

SINGLE_SUBTITLE = "Select with Up/Down and Enter (q/Esc to cancel)"
MULTI_SUBTITLE = "Use Up/Down, Space to select skills, Enter to continue, q/Esc to cancel"

MENU_CREATE = "create bundle"
MENU_EDIT = "edit bundle"
MENU_EDIT_AS_NEW = "edit bundle as new"
MENU_DELETE = "delete bundle"
MENU_EXIT = "exit"

MENU_ITEMS = {
    MENU_CREATE: "Create a custom bundle from the skill list.",
    MENU_EDIT: "Modify an existing custom bundle in place.",
    MENU_EDIT_AS_NEW: "Load an existing bundle, adjust skills, and save as a new bundle.",
    MENU_DELETE: "Delete one custom bundle from data/custom-bundles.json.",
    MENU_EXIT: "Close bundle manager.",
}

Prompt = Callable[[str], str]


def prompt_text(text: str) -> str:
    """Ask for a line of free text; an empty answer is allowed."""
    return typer.prompt(text, default="", show_default=False)


class InteractiveFlows:
    """The interactive bundle and link management flows of one repository."""

    def __init__(
        self,
        repo_root: Path,
        config: Config | None = None,
        terminal: Terminal | None = None,
        prompt: Prompt = prompt_text,
    ):
        """Initialize the flows.

        Args:
            repo_root: Skills repository root (holds skills/ and data/).
            config: Configuration (the cached global config by default).
            terminal: Terminal for selection lists (a raw TTY by default).
            prompt: Reads one line of text for names and descriptions.
        """
        self.repo_root = repo_root
        self.config = config or get_config()
        self.terminal = terminal or PromptToolkitTerminal(
            escape_timeout=self.config.ui.escape_timeout
        )
        self.prompt = prompt
        self.skills_root = get_skills_root(repo_root)
        self.catalog = SkillCatalog(self.skills_root, self.config.paths.skill_file)
        self.store = BundleStore.for_repo(repo_root)

    def select(self, items: Iterable[str], **kwargs) -> SelectionResult:
        """Run a selection list on this flow's terminal."""
        return select_items(list(items), terminal=self.terminal, **kwargs)

    def _select_skills(
        self, title: str, subtitle: str, initial_selected: Iterable[str] = ()
    ) -> SelectionResult:
        return self.select(
            self.catalog.ids,
            mode=SelectMode.MULTI,
            initial_selected=initial_selected,
            get_description=self.catalog.description,
            title=title,
            subtitle=subtitle,
            status_label="Skills selected",
        )

    def _select_bundle(
        self, bundles: list[Bundle], title: str, subtitle: str, with_source: bool
    ) -> Bundle | None:
        by_name = {bundle.name: bundle for bundle in bundles}
        pick = self.select(
            sorted(by_name),
            mode=SelectMode.SINGLE,
            get_description=lambda name: by_name[name].summary(with_source=with_source),
            title=title,
            subtitle=subtitle,
            status_label="Bundle selected",
        )
        if pick.first is None:
            return None
        return by_name[pick.first]

    def choose_agent(self) -> str | None:
        """Pick the target agent.

        Returns:
            The agent name, or None when cancelled.
        """
        agents = self.config.agents
        pick = self.select(
            list(agents),
            mode=SelectMode.SINGLE,
            get_description=lambda name: agents[name].description,
            title="Choose target agent",
            subtitle=SINGLE_SUBTITLE,
            status_label="Agent selected",
        )
        return pick.first

    def create_bundle(
        self,
        title: str = "Create custom bundle",
        subtitle: str = MULTI_SUBTITLE,
        initial_selected: Iterable[str] = (),
        name_prompt: str = "Bundle name (e.g. my-web-bundle)",
    ) -> Path | None:
        """Select skills and save them as a new custom bundle.

        Returns:
            Path of the custom bundles file, or None when nothing was saved.
        """
        if not self.catalog.ids:
            print_error("No skills found in repository.")
            return None

        pick = self._select_skills(title, subtitle, initial_selected)
        if pick.cancelled:
            print_info("Bundle creation cancelled.")
            return None
        if not pick.selected:
            print_warning("No skills selected. Bundle not created.")
            return None

        raw_name = self.prompt(name_prompt)
        bundle_name = normalize_bundle_name(raw_name)
        if not bundle_name:
            print_error(str(InvalidBundleNameError(raw_name)))
            return None

        description = self.prompt("Bundle description (optional)")
        out_file = self.store.save_custom(bundle_name, description, pick.selected)
        print_success(f'Created bundle "{bundle_name}" with {len(pick.selected)} skills.')
        print_info(f"Saved in {escape(str(out_file))}")
        return out_file

    def edit_bundle_as_new(self) -> Path | None:
        """Copy any bundle into a new custom bundle after adjusting its skills."""
        bundles = list(self.store.by_name().values())
        if not bundles:
            print_info("No bundles available to edit.")
            return None

        source = self._select_bundle(
            bundles,
            title="Edit bundle as new",
            subtitle="Select source bundle with Up/Down and Enter (q/Esc to cancel)",
            with_source=True,
        )
        if source is None:
            print_info("Bundle edit cancelled.")
            return None

        return self.create_bundle(
            title=f'Edit bundle "{source.name}" as new',
            subtitle="Toggle skills and press Enter to continue (q/Esc to cancel)",
            initial_selected=source.skills,
            name_prompt=f"New bundle name (source: {source.name})",
        )

    def edit_bundle_in_place(self) -> Path | None:
        """Change the skills and description of an existing custom bundle."""
        custom = self.store.custom()
        if not custom:
            print_info("No custom bundles available to edit in place.")
            return None

        bundle = self._select_bundle(
            custom,
            title="Edit bundle in place",
            subtitle="Select custom bundle with Up/Down and Enter (q/Esc to cancel)",
            with_source=False,
        )
        if bundle is None:
            print_info("Bundle edit cancelled.")
            return None

        pick = self._select_skills(
            title=f'Edit bundle "{bundle.name}"',
            subtitle="Toggle skills and press Enter to save (q/Esc to cancel)",
            initial_selected=bundle.skills,
        )
        if pick.cancelled:
            print_info("Bundle edit cancelled.")
            return None
        if not pick.selected:
            print_warning("No skills selected. Bundle was not changed.")
            return None

        entered = self.prompt("Bundle description (leave empty to keep current)").strip()
        out_file = self.store.save_custom(bundle.name, entered or bundle.description, pick.selected)
        print_success(f'Updated bundle "{bundle.name}" with {len(pick.selected)} skills.')
        print_info(f"Saved in {escape(str(out_file))}")
        return out_file

    def delete_bundle(self) -> bool:
        """Pick a custom bundle and delete it.

        Returns:
            True if a bundle was deleted.
        """
        custom = self.store.custom()
        if not custom:
            print_info("No custom bundles to delete.")
            return False

        bundle = self._select_bundle(
            custom,
            title="Delete custom bundle",
            subtitle="Select bundle and press Enter (q/Esc to cancel)",
            with_source=False,
        )
        if bundle is None:
            print_info("Delete cancelled.")
            return False

        if not self.store.delete_custom(bundle.name):
            print_warning(f'Bundle "{bundle.name}" not found.')
            return False
        print_success(f'Deleted custom bundle "{bundle.name}".')
        return True

    def manage_bundles(self) -> None:
        """Loop over the bundle manager menu until exit or cancel."""
        actions = {
            MENU_CREATE: self.create_bundle,
            MENU_EDIT: self.edit_bundle_in_place,
            MENU_EDIT_AS_NEW: self.edit_bundle_as_new,
            MENU_DELETE: self.delete_bundle,
        }

        while True:
            choice = self.select(
                list(MENU_ITEMS),
                mode=SelectMode.SINGLE,
                get_description=MENU_ITEMS.get,
                title="Bundle manager",
                subtitle="Select with Up/Down and Enter (q/Esc to exit)",
                status_label="Menu item selected",
            ).first

            if choice is None or choice == MENU_EXIT:
                print_info("Bundle manager closed.")
                return

            logger.debug(f"Bundle manager action: {choice}")
            actions[choice]()

    def _agent_target(self, project_root: Path, agent: str) -> Path:
        return ensure_agent_target(self.config.agent_skills_dir(project_root, agent))

    def install_bundle(self, project_root: Path) -> ReconcileResult | None:
        """Pick a bundle and an agent, then link the bundle's skills.

        Existing links are kept; the install only adds.

        Raises:
            BundleError: If no bundles exist at all.
        """
        bundles = list(self.store.by_name().values())
        if not bundles:
            raise BundleError('No bundles available. Create one with "ags bundle manage".')

        bundle = self._select_bundle(
            bundles,
            title="Install bundle",
            subtitle="Select a bundle with Up/Down and Enter (q/Esc to cancel)",
            with_source=True,
        )
        if bundle is None:
            print_info("Bundle installation cancelled.")
            return None
        if not bundle.skills:
            print_error("Selected bundle is empty.")
            return None

        agent = self.choose_agent()
        if agent is None:
            print_info("Bundle installation cancelled.")
            return None

        target = self._agent_target(project_root, agent)
        result = install_skills(bundle.skills, self.skills_root, target)

        print_success(f'Bundle "{bundle.name}" installed for {agent}.')
        print_info(f"Target: {escape(str(target))}")
        print_reconcile_result(result, verbose=True)
        return result

    def manage_links(self, project_root: Path) -> ReconcileResult | None:
        """Toggle an agent's linked skills and apply the difference.

        Raises:
            NoSkillsFoundError: If the repository has no skills.
        """
        skill_ids = self.catalog.ids
        if not skill_ids:
            raise NoSkillsFoundError(self.skills_root)

        agent = self.choose_agent()
        if agent is None:
            print_info("Symlink management cancelled.")
            return None

        target = self._agent_target(project_root, agent)
        installed = list_linked_skills(target, self.skills_root)

        pick = self._select_skills(
            title="Manage skill symlinks",
            subtitle="Use Up/Down, Space to toggle, Enter to apply, q/Esc to cancel",
            initial_selected=installed,
        )
        if pick.cancelled:
            print_info("Symlink management cancelled.")
            return None

        # Links into the source tree that are not listed skills stay as they are
        unlisted = [skill_id for skill_id in installed if skill_id not in self.catalog]
        result = reconcile([*pick.selected, *unlisted], installed, self.skills_root, target)

        print_success(f"Symlink update completed for {agent}.")
        print_info(f"Target: {escape(str(target))}")
        print_reconcile_result(result, verbose=True)
        return result
