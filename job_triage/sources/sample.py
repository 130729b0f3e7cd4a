"""Offline sample postings, used when every live source comes back empty."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

from job_triage.log import get_logger
from job_triage.models import RawJobRecord
from job_triage.sources.base import SourceAdapter

log = get_logger(__name__)

SAMPLE_JOBS: tuple[dict, ...] = (
    {
        "key": "delhaize-category-manager",
        "title": "Category Manager (H/F)",
        "company": "Delhaize",
        "location": "Asse",
        "description": "Développement de la stratégie d'assortiment pour les produits frais. Vous analysez "
        "les performances, négociez avec les fournisseurs et définissez le plan promotionnel.",
        "requirements": ["Expérience Retail", "Analyse Nielsen", "Négociation", "Bilingue FR/NL"],
        "url": "https://www.delhaize.be/jobs/category-manager",
    },
    {
        "key": "carrefour-category-manager-seafood",
        "title": "Category Manager Seafood",
        "company": "Carrefour",
        "location": "Zaventem",
        "description": "Pilotage de la catégorie Poissonnerie : sourcing durable, construction de l'offre "
        "et rentabilité du rayon marée pour l'ensemble des hypermarchés.",
        "requirements": ["Achat Marée", "Sourcing Durable", "Gestion de Catégorie", "Leadership"],
        "url": "https://careers.carrefour.eu/job/category-manager-seafood",
    },
    {
        "key": "krefel-senior-buyer",
        "title": "Senior Buyer Non-Food",
        "company": "Krefel",
        "location": "Humbeek",
        "description": "Acheteur senior pour l'électroménager. Négociation des accords cadres annuels, "
        "sélection des gammes et pilotage des marges arrière.",
        "requirements": ["Achats SDA/GEM", "Négociation Stratégique", "Anglais Courant"],
        "url": "https://jobs.krefel.be/senior-buyer",
    },
    {
        "key": "match-directeur-supermarche",
        "title": "Directeur de Supermarché (H/F)",
        "company": "Match",
        "location": "Valenciennes",
        "description": "Direction complète du point de vente. Animation commerciale, management d'une "
        "équipe de 40 personnes et garantie du compte d'exploitation.",
        "requirements": ["Directeur Magasin", "Grande Distribution", "P&L", "Management"],
        "url": "https://www.supermarchesmatch.fr/carrieres/directeur-valenciennes",
    },
    {
        "key": "colruyt-acheteur-senior",
        "title": "Acheteur Senior - Retail Food",
        "company": "Colruyt Group",
        "location": "Halle",
        "description": "Acheteur expérimenté pour les marques propres. Développement produits, audit "
        "fournisseurs et négociation des prix de revient.",
        "requirements": ["Sourcing", "Private Label", "Négociation", "NL/FR"],
        "url": "https://jobs.colruytgroup.com/buyer",
    },
    {
        "key": "lidl-district-manager",
        "title": "District Manager (H/F)",
        "company": "Lidl",
        "location": "Mons",
        "description": "Responsable d'un secteur de 5 à 7 magasins. Vous accompagnez les Responsables de "
        "Magasin dans l'atteinte de leurs objectifs et le développement de leurs équipes.",
        "requirements": ["Multi-sites", "Audit", "Coaching", "Permis B"],
        "url": "https://werkenbijlidl.be/district-manager",
    },
    {
        "key": "di-category-manager-beauty",
        "title": "Category Manager Beauty & Care",
        "company": "Di",
        "location": "Wavre",
        "description": "Gestion de la catégorie Soins/Beauté. Analyse des tendances cosmétiques, relation "
        "avec les grandes marques et définition du plan merchandising.",
        "requirements": ["Cosmétiques", "CatMan", "Marketing", "Trendwatcher"],
        "url": "https://www.di.be/jobs",
    },
)


class SampleSource(SourceAdapter):
    name = "Sample"
    id_prefix = "sample"

    def fetch_raw(self) -> list[RawJobRecord]:
        now = datetime.now(timezone.utc)
        log.info("SampleSource serving %d offline postings", len(SAMPLE_JOBS))
        return [
            RawJobRecord(
                source=self.name,
                id_prefix=self.id_prefix,
                native_id=job["key"],
                title=job["title"],
                company=job["company"],
                location=job["location"],
                description=job["description"],
                # Spread postings over the last days so recency sorting is meaningful.
                date=now - timedelta(hours=6 * i),
                url=job["url"],
                requirements=list(job["requirements"]),
            )
            for i, job in enumerate(SAMPLE_JOBS)
        ]
