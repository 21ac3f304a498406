"""
Generation targets and their static metadata.

Each tag maps to a FrameworkProfile carrying the system instruction, the
feature checklist embedded in the prompt, and the dependency / build
command lists attached to every result for that tag.
"""

from dataclasses import dataclass
from enum import Enum

from cloneforge.exceptions import UnsupportedFrameworkError


class Framework(str, Enum):
    HTML_CSS_JS = "HTML_CSS_JS"
    NEXTJS = "NEXTJS"
    REACT = "REACT"
    VUE = "VUE"
    WORDPRESS = "WORDPRESS"
    LARAVEL = "LARAVEL"
    PHP = "PHP"


@dataclass(frozen=True)
class FrameworkProfile:
    tag: Framework
    display_name: str
    system_prompt: str = ""
    task: str = ""
    requirements: tuple[str, ...] = ()
    dependencies: tuple[str, ...] = ()
    build_commands: tuple[str, ...] = ()
    uses_model: bool = True


def coerce_framework(value) -> Framework:
    """Accept a Framework or its tag string (any case); reject anything else."""
    if isinstance(value, Framework):
        return value
    if isinstance(value, str):
        try:
            return Framework(value.strip().upper())
        except ValueError:
            pass
    raise UnsupportedFrameworkError(value)


PROFILES: dict[Framework, FrameworkProfile] = {
    Framework.NEXTJS: FrameworkProfile(
        tag=Framework.NEXTJS,
        display_name="Next.js",
        system_prompt=(
            "You are an expert web developer who specializes in converting websites "
            "to modern frameworks. Generate complete, production-ready code with "
            "proper file structure and content."
        ),
        task=(
            "Analyze the following website and generate a complete Next.js 14 "
            "application that replicates its design and functionality."
        ),
        requirements=(
            "App Router structure",
            "TypeScript support",
            "Tailwind CSS for styling",
            "Responsive design matching the original",
            "SEO optimization",
            "Modern React patterns",
            "Component-based architecture",
        ),
        dependencies=("next", "react", "react-dom", "typescript",
                      "@types/react", "@types/node", "tailwindcss"),
        build_commands=("npm install", "npm run dev"),
    ),
    Framework.REACT: FrameworkProfile(
        tag=Framework.REACT,
        display_name="React",
        system_prompt=(
            "You are an expert React developer. Generate clean, modern React code "
            "with proper component structure."
        ),
        task="Create a React application that replicates the following website.",
        requirements=(
            "Modern functional components with hooks",
            "CSS modules or styled-components",
            "Responsive design matching the original",
            "Component-based architecture",
            "Proper file structure",
        ),
        dependencies=("react", "react-dom", "react-scripts",
                      "@types/react", "@types/react-dom"),
        build_commands=("npm install", "npm start"),
    ),
    Framework.VUE: FrameworkProfile(
        tag=Framework.VUE,
        display_name="Vue.js",
        system_prompt=(
            "You are an expert Vue.js developer. Generate modern Vue.js 3 code with "
            "Composition API and best practices."
        ),
        task="Create a Vue.js 3 application that replicates the following website.",
        requirements=(
            "Composition API",
            "Single File Components",
            "Scoped styles matching the original design",
            "Responsive design",
            "Modern Vue patterns",
        ),
        dependencies=("vue", "@vitejs/plugin-vue", "vite", "typescript"),
        build_commands=("npm install", "npm run dev"),
    ),
    Framework.WORDPRESS: FrameworkProfile(
        tag=Framework.WORDPRESS,
        display_name="WordPress",
        system_prompt=(
            "You are an expert WordPress developer. Generate clean, standards-compliant "
            "WordPress theme code following WordPress best practices."
        ),
        task="Create a WordPress theme that replicates the following website.",
        requirements=(
            "PHP template files (index.php, header.php, footer.php, etc.)",
            "functions.php with theme setup and enqueue scripts",
            "style.css with theme styles matching the original",
            "Responsive design",
            "WordPress best practices and hooks",
        ),
        build_commands=("Upload theme to wp-content/themes/", "Activate in WordPress admin"),
    ),
    Framework.LARAVEL: FrameworkProfile(
        tag=Framework.LARAVEL,
        display_name="Laravel",
        system_prompt=(
            "You are an expert Laravel developer. Generate clean Laravel application "
            "code following MVC patterns and Laravel best practices."
        ),
        task="Create a Laravel application that replicates the following website.",
        requirements=(
            "Blade templates matching the original design",
            "Controllers and routes",
            "CSS/JS assets organized properly",
            "Responsive design",
            "Laravel best practices",
        ),
        build_commands=("composer install", "php artisan serve"),
    ),
    Framework.PHP: FrameworkProfile(
        tag=Framework.PHP,
        display_name="PHP",
        system_prompt=(
            "You are an expert PHP developer. Generate clean, modern PHP application "
            "code with proper separation of concerns."
        ),
        task="Create a PHP application that replicates the following website.",
        requirements=(
            "Clean PHP code with proper structure",
            "Separated HTML/CSS/JS files",
            "Basic routing or structure",
            "Responsive design matching the original",
            "Modern PHP practices",
        ),
        build_commands=("Start local server: php -S localhost:8000",),
    ),
    Framework.HTML_CSS_JS: FrameworkProfile(
        tag=Framework.HTML_CSS_JS,
        display_name="HTML/CSS/JS",
        uses_model=False,
    ),
}


def get_profile(framework) -> FrameworkProfile:
    return PROFILES[coerce_framework(framework)]
