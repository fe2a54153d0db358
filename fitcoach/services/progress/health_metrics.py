"""
Body metrics helpers.
"""

LBS_TO_KG = 0.453592
INCHES_TO_METERS = 0.0254


def calculate_bmi(weight_lbs: float, feet: int, inches: int = 0) -> float:
    """
    BMI from imperial measurements, rounded to 2 decimals.

    Raises:
        ValueError: If weight or height is not positive
    """
    total_inches = feet * 12 + inches
    if weight_lbs <= 0 or total_inches <= 0:
        raise ValueError("Weight and height must be positive")

    weight_kg = weight_lbs * LBS_TO_KG
    height_m = total_inches * INCHES_TO_METERS
    return round(weight_kg / (height_m * height_m), 2)


def bmi_category(bmi: float) -> str:
    if bmi < 18.5:
        return "Underweight"
    if bmi < 25:
        return "Normal weight"
    if bmi < 30:
        return "Overweight"
    return "Obese"
