# =============================================================================
# core/seed_data.py - Starter Catalog Content
# =============================================================================
# Quotes and books inserted by the seeder on an empty (or partial) catalog.
# Missing optional fields are filled with defaults at insert time.
# =============================================================================

SEED_QUOTES: list[dict[str, str]] = [
    {
        "category": "Motivação",
        "quote": "O sucesso é a soma de pequenos esforços repetidos dia após dia.",
        "authorName": "Robert Collier",
        "authorRole": "Escritor",
    },
    {
        "category": "Liderança",
        "quote": "A liderança é a capacidade de transformar visão em realidade.",
        "authorName": "Warren Bennis",
        "authorRole": "Professor e consultor",
    },
    {
        "category": "Inspiração",
        "quote": "A única maneira de fazer um excelente trabalho é amar o que você faz.",
        "authorName": "Steve Jobs",
        "authorRole": "Empreendedor",
    },
    {
        "category": "Trabalho em Equipe",
        "quote": "Sozinhos podemos fazer tão pouco; juntos podemos fazer muito.",
        "authorName": "Helen Keller",
    },
    {
        "category": "Carreira",
        "quote": "Escolha um trabalho que você ame e não terá que trabalhar um único dia em sua vida.",
        "authorName": "Confúcio",
        "authorRole": "Filósofo",
    },
    {
        "quote": "A melhor maneira de prever o futuro é criá-lo.",
        "authorName": "Peter Drucker",
        "authorRole": "Consultor de gestão",
    },
]

SEED_BOOKS: list[dict[str, str]] = [
    {
        "category": "Desenvolvimento",
        "bookTitle": "Mindset: A Nova Psicologia do Sucesso",
        "bookAuthor": "Carol S. Dweck",
        "review": "Mostra como a crença de que habilidades podem ser desenvolvidas muda a forma como aprendemos e lideramos.",
    },
    {
        "category": "Liderança",
        "bookTitle": "Líderes se Servem por Último",
        "bookAuthor": "Simon Sinek",
        "review": "Por que algumas equipes confiam umas nas outras e outras não, e o papel do líder nisso.",
    },
    {
        "category": "Comportamento",
        "bookTitle": "O Poder do Hábito",
        "bookAuthor": "Charles Duhigg",
        "review": "Um guia prático sobre como hábitos se formam e como mudá-los, na vida e nas empresas.",
    },
    {
        "bookTitle": "Essencialismo",
        "bookAuthor": "Greg McKeown",
        "review": "A disciplina de fazer menos, porém melhor.",
    },
]
