"""Layout logic for the ranking report - pure functions for testability."""
from typing import Any, Dict, List, Tuple
from comfort_index import ComfortScorer
from weather_data import ComfortIndexResponse, RankedCity

TABLE_HEADER = f"{'#':>3}  {'City':<16} {'Temp':>7} {'Hum':>5} {'Wind':>8}  {'Score':>5}  Conditions"


def get_score_color(score: float) -> Tuple[int, int, int]:
    """
    Get RGB color for a comfort score using a simple gradient.

    Very uncomfortable (< 20) = red
    Poor (20-40) = red to orange
    Moderate (40-60) = orange to yellow
    Good (60-80) = yellow to green
    Excellent (>= 80) = green

    Args:
        score: Comfort score (0-100)

    Returns:
        Tuple of (r, g, b) values (0-255)
    """
    if score < 20:
        return (255, 0, 0)
    elif score < 40:
        ratio = (score - 20) / 20.0
        return (255, int(165 * ratio), 0)
    elif score < 60:
        ratio = (score - 40) / 20.0
        return (255, int(165 + 90 * ratio), 0)
    elif score < 80:
        ratio = (score - 60) / 20.0
        return (int(255 * (1 - ratio)), 255, 0)
    else:
        return (0, 255, 0)


def colorize(text: str, rgb: Tuple[int, int, int]) -> str:
    """Wrap text in a 24-bit ANSI foreground color escape."""
    r, g, b = rgb
    return f"\x1b[38;2;{r};{g};{b}m{text}\x1b[0m"


def format_ranking_row(city: RankedCity, color: bool = False) -> str:
    """Format one ranked city as a fixed-width table row."""
    score = f"{city.comfort_score:>5}"
    if color:
        score = colorize(score, get_score_color(city.comfort_score))
    return (
        f"{city.rank:>3}  {city.city[:16]:<16} {city.temperature:>5.1f}°C "
        f"{city.humidity:>4.0f}% {city.wind_speed:>4.1f}m/s  {score}  {city.description}"
    )


def format_ranking_table(response: ComfortIndexResponse, color: bool = False) -> List[str]:
    """
    Format the full ranking as lines of text.

    Args:
        response: Ranked cities to display
        color: Whether to color the score column with ANSI escapes

    Returns:
        Header, one line per city, and a footer with the best city's rating
    """
    lines = [TABLE_HEADER, "-" * len(TABLE_HEADER)]
    lines.extend(format_ranking_row(city, color) for city in response.cities)
    lines.append("-" * len(TABLE_HEADER))
    if response.cities:
        best = response.cities[0]
        lines.append(
            f"Most comfortable: {best.city} ({best.comfort_score}) - "
            f"{ComfortScorer.get_score_explanation(best.comfort_score)}"
        )
    lines.append(f"Generated at {response.generated_at}")
    return lines


def format_cache_status(status: Dict[str, Any]) -> List[str]:
    """Format a cache status dict (see RankingService.cache_status)."""
    stats = status["stats"]
    return [
        f"Cache: {status['status']} ({status['cached_city_count']} cities, "
        f"{status['ttl_remaining']}s remaining)",
        f"Hits: {stats['hits']}  Misses: {stats['misses']}  Hit rate: {stats['hit_rate']}",
        f"Keys ({stats['key_count']}): {', '.join(stats['keys']) or '-'}",
        f"Checked at {status['timestamp']}",
    ]
