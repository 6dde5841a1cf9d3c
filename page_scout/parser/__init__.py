"""page_scout.parser: извлечение заголовка и основного текста страницы."""
