"""page_scout.crawler: обход сайта, загрузка страниц и извлечение ссылок."""
