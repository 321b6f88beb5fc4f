PROJECT_NAME = "Sassify"
API_V1_STR = "/api/v1"
API_VERSION = "0.1.0"
SCHEMA_VERSION = "v1"

HOME_PAGE_TITLE = "Sassify - Incubateur de projets SaaS"
HOME_META_DESCRIPTION = (
    "Votre incubateur de projets SaaS. Explorez nos offres, technologies et exemples de "
    "réalisations pour lancer votre application SaaS avec succès."
)
BLOG_PAGE_TITLE = "Le Blog - Sassify"
