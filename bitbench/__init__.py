"""Small data-processing workloads: ID3 entropy, dataset and PGM image generation, and Huffman, BWT/MTF and RLE compressors."""

__version__ = "0.1.0"

__all__ = ["bwt", "chunked", "datagen", "entropy", "huffman", "pgm", "rle"]