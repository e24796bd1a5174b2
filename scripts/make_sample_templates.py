#!/usr/bin/env python
"""Write sample templates for every document kind into the templates directory.

Usage: python scripts/make_sample_templates.py [--force]
"""

import sys
from pathlib import Path

from docx import Document

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from docgen.core.config import get_settings

SAMPLES: dict[str, list[tuple[str, str]]] = {
    "mentions_legale.docx": [
        ("heading", "Mentions légales"),
        ("heading2", "Éditeur du site"),
        ("text", "Le site {siteWeb} est édité par {nomSociete}, {formeJuridique}."),
        ("text", "Siège social : {adresse}, {codePostal} {ville}."),
        ("text", "Téléphone : {telephone} - Email : {email}"),
        ("text", "SIRET : {siret}"),
        ("text", "Directeur de la publication : {dirigeant}"),
        ("heading2", "Hébergement"),
        ("text", "Le site est hébergé par {hebergeur}."),
        ("text", "Adresse : {adresseHebergeur}"),
        ("text", "Site : {siteHebergeur}"),
    ],
    "politique_de_confidentialite.docx": [
        ("heading", "Politique de confidentialité"),
        ("text", "{nomSociete}, {adresse}, est responsable du traitement des données collectées sur {siteWeb}."),
        ("heading2", "Données collectées"),
        ("text", "{collecteDonnees}"),
        ("heading2", "Finalités"),
        ("text", "{finaliteDonnees}"),
        ("text", "Durée de conservation : {dureeConservation}"),
        ("text", "Destinataires : {destinataires}"),
        ("heading2", "Vos droits"),
        ("text", "{droitsUtilisateur}"),
        ("text", "Pour exercer vos droits, écrivez à {email}."),
        ("text", "Utilisation de cookies : {cookies}"),
    ],
}


def write_sample(path: Path, blocks: list[tuple[str, str]]) -> None:
    doc = Document()
    for style, text in blocks:
        if style == "heading":
            doc.add_heading(text, level=1)
        elif style == "heading2":
            doc.add_heading(text, level=2)
        else:
            doc.add_paragraph(text)
    doc.save(path)


def main() -> None:
    force = "--force" in sys.argv[1:]
    templates_dir = get_settings().templates_dir
    templates_dir.mkdir(parents=True, exist_ok=True)

    for filename, blocks in SAMPLES.items():
        path = templates_dir / filename
        if path.exists() and not force:
            print(f"Skipping {path} (exists, use --force to overwrite)")
            continue
        write_sample(path, blocks)
        print(f"Wrote {path}")


if __name__ == "__main__":
    main()
