import platform

from pagelens.core.managers.config_manager import config_manager


def generate_default_user_agent() -> str:
    """
    Builds a desktop Chrome user agent for relay requests, matching the host
    operating system. The Chrome version comes from 'user_agent.chrome_version'.
    """
    os_name = platform.system()

    if os_name == "Windows":
        os_part = "Windows NT 10.0; Win64; x64"
    elif os_name == "Darwin":  # macOS
        os_part = "Macintosh; Intel Mac OS X 10_15_7"
    else:
        os_part = "X11; Linux x86_64"

    chrome_version = config_manager.get_nested("user_agent.chrome_version", "124.0.0.0")

    return (
        f"Mozilla/5.0 ({os_part}) AppleWebKit/537.36 (KHTML, like Gecko) "
        f"Chrome/{chrome_version} Safari/537.36"
    )
