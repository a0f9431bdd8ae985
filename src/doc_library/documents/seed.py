"""Sample catalogue for demos and local development.

Seeded documents go through the regular upload path, so each record has a
real (tiny) PDF behind it.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from .service import PDF_CONTENT_TYPE, DocumentService

logger = logging.getLogger(__name__)

SAMPLE_USERS = [
    {"fullName": "Ana García López", "email": "ana.garcia@email.com", "phone": "+1 (555) 123-4567",
     "institution": "Universidad Nacional", "areaOfInterest": "literatura"},
    {"fullName": "Carlos Mendoza", "email": "carlos.mendoza@universidad.edu", "phone": "+1 (555) 234-5678",
     "institution": "Instituto Tecnológico", "areaOfInterest": "ciencias"},
    {"fullName": "María Rodríguez", "email": "maria.rodriguez@gmail.com", "phone": "+1 (555) 345-6789",
     "institution": "Biblioteca Central", "areaOfInterest": "historia"},
]

SAMPLE_DOCUMENTS = [
    {"title": "Cien años de soledad", "author": "Gabriel García Márquez", "category": "novela", "year": 1967,
     "description": "Una obra maestra del realismo mágico",
     "keywords": "realismo mágico, literatura latinoamericana"},
    {"title": "Don Quijote de La Mancha", "author": "Miguel de Cervantes", "category": "novela", "year": 1605,
     "description": "La historia del ingenioso hidalgo", "keywords": "literatura clásica, aventuras"},
    {"title": "El Aleph", "author": "Jorge Luis Borges", "category": "cuento", "year": 1949,
     "description": "Cuentos fantásticos y filosóficos", "keywords": "literatura fantástica, filosofía"},
    {"title": "La Casa de los Espíritus", "author": "Isabel Allende", "category": "novela", "year": 1982,
     "description": "Saga familiar en Chile", "keywords": "realismo mágico, familia"},
    {"title": "Rayuela", "author": "Julio Cortázar", "category": "novela", "year": 1963,
     "description": "Novela experimental revolucionaria", "keywords": "literatura experimental, vanguardia"},
    {"title": "Pedro Páramo", "author": "Juan Rulfo", "category": "novela", "year": 1955,
     "description": "Historia de fantasmas en Comala", "keywords": "realismo mágico, México"},
    {"title": "Ficciones", "author": "Jorge Luis Borges", "category": "cuento", "year": 1944,
     "description": "Cuentos laberínticos", "keywords": "literatura fantástica, laberintos"},
    {"title": "La Ciudad y los Perros", "author": "Mario Vargas Llosa", "category": "novela", "year": 1963,
     "description": "Novela sobre la adolescencia", "keywords": "literatura peruana, juventud"},
]


def minimal_pdf(text: str) -> bytes:
    """Build a one-page PDF showing ``text`` (Latin-1, Helvetica)."""
    escaped = text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")
    stream = f"BT /F1 18 Tf 72 720 Td ({escaped}) Tj ET".encode("latin-1", "replace")
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Resources << /Font << /F1 4 0 R >> >> /Contents 5 0 R >>",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
        b"<< /Length %d >>\nstream\n%s\nendstream" % (len(stream), stream),
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n%s\nendobj\n" % (number, body)

    xref_at = len(out)
    out += b"xref\n0 %d\n0000000000 65535 f \n" % (len(objects) + 1)
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (len(objects) + 1, xref_at)
    return bytes(out)


async def seed_sample_data(service: DocumentService, rng: Optional[random.Random] = None) -> None:
    """Register the sample users and upload the sample documents."""
    rng = rng or random.Random()
    users = [service.register_user(data) for data in SAMPLE_USERS]
    for data in SAMPLE_DOCUMENTS:
        uploader = rng.choice(users)
        await service.upload(
            {**data, "uploadedBy": uploader.id},
            minimal_pdf(f"{data['title']} - {data['author']}"),
            filename=f"{data['title']}.pdf",
            content_type=PDF_CONTENT_TYPE,
        )
    logger.info("Seeded %d users and %d documents", len(users), len(SAMPLE_DOCUMENTS))
