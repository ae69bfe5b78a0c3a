#!/usr/bin/env python3
"""
Matrix-matrix, matrix-vector and vector-vector operations
=========================================================

Every operation has a named function in ``densela`` (``dot``, ``cross``,
``multiply``, ...). The operators ``+``, ``-`` and ``*`` on the containers
call those same functions.
"""

from densela import Matrix3, Vector3


def main() -> int:
    print("=" * 60)
    print("1. VECTOR-VECTOR OPERATIONS")
    print("-" * 60)

    vector1 = Vector3()
    vector2 = Vector3()
    vector1.set_random()
    vector2.set_random()
    print(f"vector1 (transpose): {vector1.transpose()}")
    print(f"vector2 (transpose): {vector2.transpose()}")
    print(f"Dot product: {vector1.dot(vector2):.6g}")

    print(f"vector1 (norm): {vector1.norm():.6g}")
    print(f"vector2 (norm): {vector2.norm():.6g}")

    normalized_vector1 = vector1.normalized()
    print(f"Normalized vector1 (norm): {normalized_vector1.norm():.6g}")
    # In place
    vector1.normalize()

    added_vectors = vector1 + vector2
    print(f"Added vectors (transpose): {added_vectors.transpose()}")

    scalar = 5.0
    scaled_vector = scalar * vector1
    print(f"Original vector (norm): {vector1.norm():.6g}")
    print(f"Scaled Vector (norm): {scaled_vector.norm():.6g}")

    cross_product = vector1.cross(vector2)
    print(f"Cross product: {cross_product.transpose()}")

    print("\n2. MATRIX-VECTOR OPERATIONS")
    print("-" * 60)

    random_matrix = Matrix3.random()
    print(f"Matrix-vector multiplication: \n{random_matrix * scaled_vector}")

    print("\n3. MATRIX-MATRIX OPERATIONS")
    print("-" * 60)

    identity = Matrix3.identity()
    print(f"Addition: \n{identity + random_matrix}")
    result = identity * random_matrix
    print(f"Multiplication: \n{result}")

    # Evaluated eagerly, left to right
    result2 = (scalar * identity * random_matrix * scaled_vector) + added_vectors
    print(f"Chained evaluation: {result2.transpose()}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
