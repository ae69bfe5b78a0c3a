#!/usr/bin/env python3
"""
Creating vectors and matrices
=============================

Fixed-size 3-/4-component vectors and 3x3/4x4 matrices cover most
geometry work. Their size is part of the class. ``Vector(n)`` and
``Matrix(rows, cols)`` take their dimensions at construction instead.

Precision 'f' (float32) is the default; ``precision='d'`` selects float64.
"""

from densela import Matrix, Matrix3, Matrix4, Vector, Vector3, Vector4


def main() -> int:
    print("=" * 60)
    print("1. FIXED-SIZE VECTORS")
    print("-" * 60)

    my_3d_vector = Vector3()
    print(f"Vector size: {my_3d_vector.size}")
    my_3d_vectord = Vector3(precision='d')
    print(f"Vector size: {my_3d_vectord.size}")
    my_4d_vector = Vector4()
    print(f"Vector size: {my_4d_vector.size}")
    my_4d_vectord = Vector4(precision='d')
    print(f"Vector size: {my_4d_vectord.size}")

    print("\n2. DYNAMIC VECTORS AND MATRICES")
    print("-" * 60)

    # Dynamic containers need their dimensions up front
    my_3d_heap_vector_1 = Vector(3)
    my_3d_heap_vector_1.set_random()
    print(f"Vector (transpose): {my_3d_heap_vector_1.transpose()}")

    my_matrix = Matrix(3, 3)
    my_matrix.set_zero()
    # (row, column)
    my_matrix[0, 0] = 1.0
    my_matrix[1, 1] = 1.0
    my_matrix[2, 2] = 1.0
    print(f"Matrix: \n{my_matrix}")

    print("\n3. FIXED-SIZE MATRICES")
    print("-" * 60)

    my_3x3 = Matrix3()
    my_3x3.set_random()
    print(f"Matrix: \n{my_3x3}")
    my_4x4 = Matrix4()
    my_4x4.set_identity()
    print(f"Matrix: \n{my_4x4}")
    print(f"Rows: {my_4x4.rows}")
    print(f"Cols: {my_4x4.cols}")

    print("\n4. ELEMENT ACCESS")
    print("-" * 60)

    v = my_3d_heap_vector_1
    print(f"Vector (transpose): {v[0]:.6g} {v[1]:.6g} {v[2]:.6g}")
    # Named components for the first four entries
    print(f"Vector (transpose): {v.x:.6g} {v.y:.6g} {v.z:.6g}")
    my_4d_vectord.set_random()
    print(
        f"Vector (transpose): {my_4d_vectord.x:.6g} {my_4d_vectord.y:.6g} "
        f"{my_4d_vectord.z:.6g} {my_4d_vectord.w:.6g}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
