#!/usr/bin/env python3
"""
Extraction du vecteur de features histopathologiques d'une tuile.

Charge une segmentation de noyaux (carte de labels entière, ou masque binaire
ensuite découpé en composantes 8-connexes) et l'image H&E correspondante,
puis écrit le vecteur de features étiqueté en JSON (NaN -> null).

Usage:
    python scripts/extract_histopath_features.py --labels instances.npy --image tile.png
    python scripts/extract_histopath_features.py --labels mask.png --image tile.png \
        --out results/tile_features.json --n-workers 4
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import cv2
import numpy as np
from skimage.measure import label

# Ajouter le chemin du projet
sys.path.insert(0, str(Path(__file__).parent.parent))

from histofeatures import (
    FeatureConfig,
    FilterBankConfig,
    HistoFeaturesError,
    RegionSet,
    compute_histopath_features,
)

logger = logging.getLogger(__name__)


def load_label_map(path: Path) -> np.ndarray:
    """Carte de labels entière depuis .npy/.npz ou un fichier image."""
    if path.suffix == ".npy":
        labels = np.load(path)
    elif path.suffix == ".npz":
        with np.load(path) as data:
            key = "inst_map" if "inst_map" in data else data.files[0]
            labels = data[key]
    else:
        labels = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
        if labels is None:
            raise FileNotFoundError(f"Cannot read label image: {path}")
        if labels.ndim == 3:
            labels = labels[:, :, 0]

    labels = np.asarray(labels)
    if labels.dtype == bool or np.unique(labels).size <= 2:
        # Masque binaire: découpage en noyaux connexes
        labels = label(labels > 0, connectivity=2)
        logger.info(f"Binary mask split into {labels.max()} connected components")

    return labels.astype(np.int32)


def load_image(path: Path) -> np.ndarray:
    """Image en RGB (3 canaux), RGBA (4 canaux), sinon disposition inchangée."""
    image = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if image is None:
        raise FileNotFoundError(f"Cannot read image: {path}")
    if image.ndim == 3 and image.shape[2] == 3:
        image = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
    elif image.ndim == 3 and image.shape[2] == 4:
        image = cv2.cvtColor(image, cv2.COLOR_BGRA2RGBA)
    return image


def main():
    parser = argparse.ArgumentParser(description="Extraction de features nucléaires histopathologiques")
    parser.add_argument("--labels", type=Path, required=True,
                        help="Carte de labels (.npy, .npz ou image) des noyaux candidats")
    parser.add_argument("--image", type=Path, required=True,
                        help="Image H&E de même taille")
    parser.add_argument("--out", type=Path, default=None,
                        help="JSON de sortie (défaut: affichage sur stdout)")
    parser.add_argument("--disorder", choices=["entropy", "coefficient"], default="entropy",
                        help="Statistique de désordre des résumés de distribution")
    parser.add_argument("--n-workers", type=int, default=1,
                        help="Threads pour le banc de filtres de Gabor")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    config = FeatureConfig(
        filter_bank=FilterBankConfig(n_workers=args.n_workers),
        disorder=args.disorder,
    )

    regions = RegionSet.from_label_image(load_label_map(args.labels))
    image = load_image(args.image)
    logger.info(f"Loaded {regions} and image {image.shape}")

    try:
        features = compute_histopath_features(regions, image, config)
    except HistoFeaturesError as e:
        logger.error(f"Feature extraction failed: {e}")
        return 1

    payload = {
        name: (value if np.isfinite(value) else None)
        for name, value in features.as_dict().items()
    }

    if args.out is None:
        print(json.dumps(payload, indent=2))
    else:
        args.out.parent.mkdir(parents=True, exist_ok=True)
        with open(args.out, "w") as f:
            json.dump(payload, f, indent=2)
        logger.info(f"Saved {len(payload)} features to {args.out}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
