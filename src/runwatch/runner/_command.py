"""Launch command construction for the automation tool."""

from ._models import RunnerConfig  # noqa: TC001 - Used in runtime type annotations


def build_launch_command(config: RunnerConfig) -> str:
    """Build the shell command line that launches the automation tool.

    Every path and value is wrapped in single quotes; the language value is
    additionally wrapped in parentheses, as the tool expects a list.

    Args:
        config: Runner configuration.

    Returns:
        The command line, suitable for ``sh -c``.
    """
    parts: list[str] = []
    if config.developer_dir:
        parts.append(f"env DEVELOPER_DIR='{config.developer_dir}'")
    parts.append(config.tool_path)

    target = config.target_id
    if target is not None:
        parts.append(f"-w '{target}'")

    parts.append(f"-t '{config.template_path}'")
    parts.append(f"'{config.app_location}'")
    parts.append(f"-e UIASCRIPT '{config.script_path}'")
    parts.append(f"-e UIARESULTSPATH '{config.results_dir}'")

    if config.sim_language:
        parts.append(f"-AppleLanguages '({config.sim_language})'")
    if config.sim_locale:
        parts.append(f"-AppleLocale '{config.sim_locale}'")

    return " ".join(parts)
