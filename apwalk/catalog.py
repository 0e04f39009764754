"""Built-in tours for the AP visualizations, and tour lookup."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

from .tutorial.loader import TourFormatError, discover_tours, load_tour
from .tutorial.steps import Department, Tour, TourStep

UNIT_CIRCLE = Tour(
    slug="unit-circle",
    title="Unit Circle & Trigonometry",
    department=Department.MATH,
    controls={
        "angle": 45,
        "angle_unit": "degrees",
        "show_sin_cos": True,
        "show_tan": False,
        "show_special_angles": False,
    },
    steps=[
        TourStep(
            "The Unit Circle",
            "A circle with radius 1 centered at the origin. Every point on it can be "
            "described as (cos θ, sin θ).",
            controls={"angle": 0, "show_sin_cos": True, "show_tan": False},
        ),
        TourStep(
            "Sine Function",
            "sin θ is the Y-coordinate of the point on the unit circle. It ranges from "
            "-1 to 1. Watch the vertical projection.",
            controls={"angle": 90, "show_sin_cos": True},
        ),
        TourStep(
            "Cosine Function",
            "cos θ is the X-coordinate. Together, sin and cos fully describe any angle. "
            "Note: cos is just sin shifted by 90°.",
            controls={"angle": 0, "show_sin_cos": True},
        ),
        TourStep(
            "Tangent Function",
            "tan θ = sin θ / cos θ. Geometrically, it is the length of the tangent line "
            "segment from the point to the x-axis. Undefined at 90° and 270°.",
            controls={"angle": 45, "show_tan": True},
        ),
        TourStep(
            "Pythagorean Identity",
            "sin²θ + cos²θ = 1 always. This comes directly from the Pythagorean theorem "
            "applied to the unit circle triangle.",
            controls={"angle": 60, "show_sin_cos": True},
        ),
        TourStep(
            "Special Angles",
            "Memorize values at 0°, 30°, 45°, 60°, 90° and use symmetry for all others. "
            "These appear constantly on tests!",
            controls={"show_special_angles": True, "angle": 30},
        ),
        TourStep(
            "Radians vs Degrees",
            '180° = π radians. Radians are the "natural" unit: arc length = radius * '
            "angle. Calculus always uses radians.",
            controls={"angle_unit": "radians", "angle": 180},
        ),
        TourStep(
            "All Six Functions",
            "sin, cos, tan and their reciprocals: csc = 1/sin, sec = 1/cos, cot = 1/tan. "
            "Know the domains and ranges!",
            controls={"angle": 45, "show_sin_cos": True, "show_tan": True},
        ),
    ],
)

DERIVATIVE = Tour(
    slug="derivative",
    title="The Derivative",
    department=Department.CALCULUS,
    controls={
        "func": "x2",
        "x_pos": 1.5,
        "h": 1.0,
        "show_tangent": True,
        "show_derivative_graph": False,
    },
    steps=[
        TourStep(
            "The Slope of a Curve",
            "Unlike a line, a curve has a different slope at every point. The derivative "
            "tells us the instantaneous rate of change -- the slope of the curve at a "
            "single point.",
            highlight="Drag the x-position slider to see how the slope changes.",
            controls={
                "func": "x2",
                "x_pos": 1.5,
                "h": 1.0,
                "show_tangent": True,
                "show_derivative_graph": False,
            },
        ),
        TourStep(
            "The Secant Line",
            "A secant line passes through two points on the curve: (x, f(x)) and "
            "(x+h, f(x+h)). Its slope is the average rate of change over the interval "
            "[x, x+h].",
            highlight="Notice the secant line connecting two points on the curve.",
            controls={"h": 1.5, "show_tangent": False},
        ),
        TourStep(
            "The Limit Definition",
            "As h approaches 0, the secant line approaches the tangent line. The "
            "derivative is defined as: f'(x) = lim(h->0) [f(x+h) - f(x)] / h. Watch the "
            "secant morph into the tangent!",
            highlight="Decrease h toward 0 and watch the secant approach the tangent.",
            controls={"h": 0.3, "show_tangent": True},
        ),
        TourStep(
            "The Tangent Line",
            "The tangent line touches the curve at exactly one point and has slope equal "
            "to f'(x). It represents the best linear approximation of the function near "
            "that point.",
            highlight="The tangent line slope equals the derivative value.",
            controls={"h": 0.01, "show_tangent": True},
        ),
        TourStep(
            "The Derivative as a Function",
            "f'(x) is itself a function. For f(x) = x², the derivative f'(x) = 2x is a "
            "line. Toggle the f'(x) graph to see the derivative plotted below.",
            highlight="Enable \"Show f'(x) graph\" to see the derivative function.",
            controls={"func": "x2", "show_derivative_graph": True, "h": 0.5},
        ),
        TourStep(
            "Common Derivatives",
            "Power rule: d/dx[xⁿ] = nxⁿ⁻¹. Trig: d/dx[sin(x)] = cos(x). Exponential: "
            "d/dx[eˣ] = eˣ. Try switching functions to verify these rules!",
            highlight="Select different functions and compare f(x) with f'(x).",
            controls={"func": "sin", "show_derivative_graph": True, "x_pos": 0.0},
        ),
        TourStep(
            "Where f'(x) = 0",
            "When f'(x) = 0, the tangent line is horizontal -- this indicates a local "
            "maximum, minimum, or inflection point. These critical points are key in "
            "optimization.",
            highlight="Move x to where the tangent line is flat (slope = 0).",
            controls={
                "func": "x3",
                "x_pos": 0.0,
                "show_derivative_graph": True,
                "show_tangent": True,
                "h": 0.01,
            },
        ),
        TourStep(
            "Chain Rule Concept",
            "For composite functions f(g(x)), the derivative is f'(g(x)) * g'(x). The "
            'chain rule lets us differentiate "function inside a function" by '
            "multiplying the rates.",
            highlight="This foundational rule extends to all composite derivatives.",
            controls={
                "func": "exp",
                "show_derivative_graph": True,
                "x_pos": 1.0,
                "show_tangent": True,
                "h": 0.01,
            },
        ),
    ],
)

RIEMANN = Tour(
    slug="riemann",
    title="Riemann Sums",
    department=Department.CALCULUS,
    controls={
        "func": "x2",
        "n": 4,
        "method": "left",
        "a": 0.0,
        "b": 3.0,
        "show_exact": True,
    },
    steps=[
        TourStep(
            "What is a Riemann Sum?",
            "A Riemann sum approximates the area under a curve by dividing the region "
            "into rectangles. The sum of rectangle areas approaches the true integral as "
            "n increases.",
            highlight="Notice the 4 rectangles approximating the area under x².",
            controls={
                "func": "x2",
                "n": 4,
                "method": "left",
                "a": 0.0,
                "b": 3.0,
                "show_exact": True,
            },
        ),
        TourStep(
            "Left Riemann Sum",
            "Each rectangle's height equals f(x) at the LEFT endpoint of each "
            "subinterval. For increasing functions, left sums underestimate the true "
            "area.",
            highlight="The top-left corner of each rectangle touches the curve.",
            controls={"method": "left", "n": 6},
        ),
        TourStep(
            "Right Riemann Sum",
            "Each rectangle's height equals f(x) at the RIGHT endpoint. For increasing "
            "functions, right sums overestimate the true area.",
            highlight="The top-right corner of each rectangle touches the curve.",
            controls={"method": "right", "n": 6},
        ),
        TourStep(
            "Midpoint Rule",
            "The height equals f(x) at the MIDPOINT of each subinterval. Midpoint often "
            "gives a better approximation than left or right for the same n.",
            highlight="The purple dots mark each midpoint sample.",
            controls={"method": "midpoint", "n": 6},
        ),
        TourStep(
            "Trapezoidal Rule",
            "Instead of rectangles, we use trapezoids connecting f(xL) to f(xR). This "
            "captures the slope of the function within each subinterval.",
            highlight="Notice the slanted tops following the curve more closely.",
            controls={"method": "trapezoid", "n": 6},
        ),
        TourStep(
            "Convergence: Increasing n",
            "As n increases, all methods converge to the exact integral. Watch the error "
            "shrink dramatically from n=4 to n=50.",
            highlight="With 50 rectangles the error is very small.",
            controls={"method": "left", "n": 50},
        ),
        TourStep(
            "The Definite Integral",
            "The definite integral is the LIMIT of the Riemann sum as n → ∞. It gives "
            "the exact signed area between the curve and the x-axis on [a,b].",
            highlight="At n=200, the sum is nearly indistinguishable from the exact integral.",
            controls={"n": 200, "show_exact": True},
        ),
        TourStep(
            "Signed Area (Negative Values)",
            "When f(x) < 0, the signed area is negative (red/pink). The integral gives "
            "NET area: positive area above x-axis minus area below.",
            highlight="Green = positive area, red = negative area.",
            controls={"func": "cubic", "a": -1.5, "b": 1.5, "n": 30, "method": "midpoint"},
        ),
    ],
)


def _approach(func: str, approach_x: float, epsilon: float = 0.5) -> Dict:
    return {"func": func, "approach_x": approach_x, "epsilon": epsilon}


LIMITS = Tour(
    slug="limits",
    title="Limits & Continuity",
    department=Department.CALCULUS,
    controls={
        "func": "sinc",
        "approach_x": 0.0,
        "epsilon": 0.5,
        "show_delta": True,
        "zoom": 1.0,
        "show_tangent": False,
    },
    steps=[
        TourStep(
            "What is a Limit?",
            "A limit describes the value a function approaches as x gets closer to a "
            "point. It does not depend on the actual value at that point -- only on "
            "nearby behavior.",
            highlight="Watch the left and right arrows converge toward L",
            controls=dict(_approach("sinc", 0.0), show_delta=True),
        ),
        TourStep(
            "Epsilon-Delta Definition",
            "For every epsilon > 0, there exists a delta > 0 such that if "
            "0 < |x - a| < delta, then |f(x) - L| < epsilon. The purple horizontal band "
            "is epsilon; the vertical band is delta.",
            highlight="Try shrinking epsilon -- delta shrinks too!",
            controls={"func": "sinc", "epsilon": 0.3, "show_delta": True},
        ),
        TourStep(
            "Removable Discontinuity",
            "sin(x)/x is undefined at x=0, but the limit exists and equals 1. This is a "
            'removable discontinuity -- we could "fill in" the hole to make it '
            "continuous.",
            controls=_approach("sinc", 0.0),
        ),
        TourStep(
            "Jump Discontinuity",
            "This piecewise function has different left and right limits at x=2. The "
            "overall limit does not exist because the one-sided limits disagree.",
            highlight="Left limit = 3, Right limit = 1",
            controls=_approach("piecewise", 2.0),
        ),
        TourStep(
            "Infinite Discontinuity",
            "f(x) = 1/x has a vertical asymptote at x=0. As x approaches 0 from the "
            "right, f(x) goes to +infinity. From the left, it goes to -infinity.",
            controls=_approach("reciprocal", 0.0),
        ),
        TourStep(
            "Oscillating -- Limit DNE",
            "sin(1/x) oscillates infinitely fast as x approaches 0. The function never "
            "settles on a single value, so the limit does not exist.",
            controls=_approach("oscillating", 0.0),
        ),
        TourStep(
            "One-Sided Limits",
            "For |x-1|/(x-1), the left limit is -1 and the right limit is +1. One-sided "
            "limits can exist even when the two-sided limit does not.",
            highlight="The left and right limits differ by 2",
            controls=_approach("absolute", 1.0),
        ),
        TourStep(
            "Continuity",
            "A function is continuous at x=a when three conditions hold: f(a) is "
            "defined, the limit exists, and f(a) equals the limit. Select the polynomial "
            "to see a continuous function.",
            controls=_approach("polynomial", 1.0),
        ),
    ],
)

CELL_DIVISION = Tour(
    slug="cell-division",
    title="Cell Division",
    department=Department.BIOLOGY,
    controls={
        "division_type": "mitosis",
        "phase_index": 0,
        "progress": 0,
        "speed": 50,
        "show_crossing": True,
        "show_comparison": False,
    },
    steps=[
        TourStep(
            "Cell Division Overview",
            "Cells divide to grow, repair, and reproduce. Mitosis produces identical "
            "cells; meiosis produces gametes with half the chromosomes.",
            highlight="Toggle between Mitosis and Meiosis modes.",
        ),
        TourStep(
            "Interphase & DNA Replication",
            "Before division, the cell copies its DNA during S phase. Each chromosome "
            "becomes two sister chromatids joined at the centromere.",
            controls={"phase_index": 0, "progress": 50},
        ),
        TourStep(
            "Prophase & Chromosome Condensation",
            "Chromatin condenses into visible chromosomes. In Meiosis I, homologous "
            "chromosomes pair up (synapsis) and crossing over shuffles genetic material.",
            controls={"phase_index": 1, "progress": 50},
        ),
        TourStep(
            "Metaphase Alignment",
            "Chromosomes line up along the cell equator. Spindle fibers from centrioles "
            "attach to kinetochores on each chromosome.",
            controls={"phase_index": 2, "progress": 50},
        ),
        TourStep(
            "Anaphase Separation",
            "In mitosis, sister chromatids separate. In meiosis I, homologous pairs "
            "separate (reductional division), halving the chromosome count.",
            controls={"phase_index": 3, "progress": 50},
        ),
        TourStep(
            "Telophase & Cytokinesis",
            "Nuclear envelopes reform and the cell physically divides. Mitosis yields 2 "
            "diploid cells; meiosis eventually yields 4 haploid cells.",
            controls={"phase_index": 4, "progress": 50},
        ),
        TourStep(
            "Crossing Over (Meiosis)",
            "During Prophase I, non-sister chromatids of homologous chromosomes exchange "
            "segments (crossing over), increasing genetic variation.",
            controls={
                "division_type": "meiosis",
                "phase_index": 1,
                "show_crossing": True,
                "progress": 50,
            },
        ),
        TourStep(
            "Comparison Mode",
            "Enable comparison mode to see mitosis and meiosis side by side. Notice the "
            "key difference: mitosis preserves ploidy while meiosis halves it.",
            controls={"show_comparison": True},
        ),
    ],
)

SORTING = Tour(
    slug="sorting",
    title="Sorting Algorithms",
    department=Department.CS,
    controls={
        "algorithms": ("bubble", "merge", "quick"),
        "array_size": 30,
        "speed": 30,
        "step_mode": False,
    },
    steps=[
        TourStep(
            "Sorting Algorithms",
            "Sorting is fundamental in CS. We compare different algorithms by their time "
            "and space complexity.",
            controls={"algorithms": ("bubble", "merge", "quick"), "array_size": 30},
        ),
        TourStep(
            "Bubble Sort",
            "Repeatedly swaps adjacent elements. Simple but O(n^2) -- very slow for "
            "large arrays. Best case O(n) if already sorted.",
            controls={"algorithms": ("bubble",), "array_size": 20},
        ),
        TourStep(
            "Selection Sort",
            "Finds the minimum in the unsorted portion and places it. Always O(n^2) "
            "comparisons regardless of input.",
            controls={"algorithms": ("selection",), "array_size": 20},
        ),
        TourStep(
            "Insertion Sort",
            "Builds the sorted array one element at a time. Efficient for small or "
            "nearly-sorted data. O(n) best, O(n^2) worst.",
            controls={"algorithms": ("insertion",), "array_size": 20},
        ),
        TourStep(
            "Merge Sort",
            "Divide and conquer: split in half, sort each, then merge. Always "
            "O(n log n) but uses O(n) extra space.",
            controls={"algorithms": ("merge",), "array_size": 20},
        ),
        TourStep(
            "Quick Sort",
            "Picks a pivot and partitions. Average O(n log n), worst O(n^2) on bad "
            "pivots. In-place with O(log n) stack space.",
            controls={"algorithms": ("quick",), "array_size": 20},
        ),
        TourStep(
            "Race Mode",
            "Compare algorithms head-to-head. Watch how divide-and-conquer algorithms "
            "finish faster than quadratic ones.",
            highlight="Click Start Race to see all algorithms compete.",
            controls={"algorithms": ("bubble", "merge", "quick"), "array_size": 30},
        ),
        TourStep(
            "Step Mode",
            "Enable step mode to advance one operation at a time. This helps you trace "
            "exactly how each algorithm works.",
            controls={"step_mode": True, "algorithms": ("bubble",), "array_size": 10},
        ),
    ],
)

# 50 mL of 0.1 M acid against 0.1 M base: equivalence at 50 mL.
_EQUIVALENCE_ML = 50

TITRATION = Tour(
    slug="titration",
    title="Acid-Base Titration",
    department=Department.CHEMISTRY,
    controls={
        "acid_type": "weak",
        "base_type": "strong",
        "acid_conc": 0.1,
        "base_conc": 0.1,
        "titrant_volume": 0,
        "show_indicator": True,
        "ka": 1.8e-5,
    },
    steps=[
        TourStep(
            "Acid-Base Titration",
            "Titration determines unknown concentration by gradually adding a known "
            "reagent (titrant). The equivalence point occurs when moles of acid = moles "
            "of base. The pH curve reveals the acid/base strength.",
            controls={
                "acid_type": "weak",
                "base_type": "strong",
                "titrant_volume": 0,
                "acid_conc": 0.1,
                "base_conc": 0.1,
            },
        ),
        TourStep(
            "Strong Acid + Strong Base",
            "SA-SB titration: starts at low pH, steep rise near equivalence point at "
            "pH 7. Both before and after equivalence, pH is determined by excess strong "
            "acid or strong base.",
            controls={"acid_type": "strong", "base_type": "strong", "titrant_volume": 0},
        ),
        TourStep(
            "Weak Acid + Strong Base",
            "WA-SB titration: starts higher than SA, has a BUFFER REGION before "
            "equivalence, and equivalence point is ABOVE pH 7 (conjugate base is "
            "basic). The curve is less steep.",
            controls={
                "acid_type": "weak",
                "base_type": "strong",
                "titrant_volume": 0,
                "ka": 1.8e-5,
            },
        ),
        TourStep(
            "Buffer Region",
            "In the buffer region, the solution contains significant amounts of BOTH "
            "weak acid (HA) and its conjugate base (A-). pH changes slowly. "
            "Henderson-Hasselbalch: pH = pKa + log([A-]/[HA]).",
            controls={"acid_type": "weak", "titrant_volume": _EQUIVALENCE_ML // 2},
        ),
        TourStep(
            "Half-Equivalence Point",
            "At the half-equivalence point, exactly half the acid is neutralized: "
            "[HA] = [A-]. Therefore pH = pKa (since log(1) = 0). This is used to "
            "experimentally determine Ka.",
            controls={"titrant_volume": _EQUIVALENCE_ML // 2},
        ),
        TourStep(
            "Equivalence Point",
            "At equivalence, moles acid = moles base. For WA-SB, the solution contains "
            "only conjugate base (A-), so pH > 7. For SA-SB, pH = 7. The indicator "
            "should change color here.",
            controls={"titrant_volume": _EQUIVALENCE_ML, "show_indicator": True},
        ),
        TourStep(
            "Beyond Equivalence",
            "After equivalence, excess strong base dominates. pH rises sharply and is "
            "determined by [OH-] from excess NaOH. The curve levels off at high pH.",
            controls={"titrant_volume": _EQUIVALENCE_ML * 3 // 2},
        ),
        TourStep(
            "Ka and Acid Strength",
            "Larger Ka = stronger weak acid = lower initial pH. Smaller Ka = weaker "
            "acid = higher initial pH and more gradual curve. The pKa appears at the "
            "half-equivalence point.",
            controls={"ka": 1e-3, "titrant_volume": 0},
        ),
    ],
)


def _scenario(name: str, ad_shift: float, sras_shift: float, lras_shift: float = 0.0) -> Dict:
    return {
        "scenario": name,
        "ad_shift": ad_shift,
        "sras_shift": sras_shift,
        "lras_shift": lras_shift,
    }


AD_AS = Tour(
    slug="ad-as",
    title="Aggregate Demand & Supply",
    department=Department.ECONOMICS,
    controls={
        "scenario": "neutral",
        "ad_shift": 0.0,
        "sras_shift": 0.0,
        "lras_shift": 0.0,
        "show_lras": True,
    },
    steps=[
        TourStep(
            "The AD-AS Model",
            "Aggregate Demand (AD) is total spending. Short-Run Aggregate Supply (SRAS) "
            "is total production at each price level.",
            controls=_scenario("neutral", 0.0, 0.0),
        ),
        TourStep(
            "Long-Run Aggregate Supply",
            "The vertical LRAS shows potential output (Y*). In the long run, output "
            "returns here regardless of prices.",
            controls=dict(_scenario("neutral", 0.0, 0.0), show_lras=True),
        ),
        TourStep(
            "Recessionary Gap",
            "AD shifts left: less spending, output falls BELOW potential. Unemployment "
            "rises.",
            controls=_scenario("recession", -0.4, 0.0),
        ),
        TourStep(
            "Inflationary Gap",
            "AD shifts right: more spending, output temporarily exceeds potential. "
            "Prices rise.",
            controls=_scenario("inflation", 0.4, 0.0),
        ),
        TourStep(
            "Stagflation",
            "Leftward SRAS shift: falling output AND rising prices. Oil crises, "
            "pandemics.",
            controls=_scenario("stagflation", 0.0, -0.4),
        ),
        TourStep(
            "Long-Run Growth",
            "LRAS shifts right: more capacity without inflation. Technology, education, "
            "investment.",
            controls=_scenario("growth", 0.3, 0.3, 0.3),
        ),
        TourStep(
            "Self-Correction",
            "In the long run, SRAS adjusts to move economy back to LRAS. Wages and "
            "prices are flexible long-run.",
            controls=_scenario("neutral", 0.0, 0.0),
        ),
        TourStep(
            "Experiment",
            "Use sliders to shift AD and SRAS. Can you create a recession? An "
            "inflationary gap?",
            controls=_scenario("neutral", 0.0, 0.0),
        ),
    ],
)

def _point(x: int, y: int, on_curve: bool = False) -> Dict:
    return {"point_x": x, "point_y": y, "snap_to_curve": on_curve}


# snap_to_curve moves the point to the nearest spot on the frontier.
PPC = Tour(
    slug="ppc",
    title="Production Possibilities Curve",
    department=Department.ECONOMICS,
    controls={
        "point_x": 60,
        "point_y": 60,
        "snap_to_curve": False,
        "shift_factor": 0.0,
    },
    steps=[
        TourStep(
            "Production Possibilities Curve",
            "The PPC shows all possible combinations of two goods an economy can produce "
            "with its available resources. Points ON the curve are efficient - using all "
            "resources fully.",
        ),
        TourStep(
            "Efficient Production",
            "This point is ON the curve - the economy is using all its resources "
            "efficiently. Click anywhere on the curve to produce at full capacity.",
            controls=_point(70, 70, on_curve=True),
        ),
        TourStep(
            "Inefficient Production",
            "Points INSIDE the curve mean some resources are unemployed or "
            "underutilized - like during a recession. The economy could produce more!",
            controls=_point(40, 40),
        ),
        TourStep(
            "Unattainable Points",
            "Points OUTSIDE the curve are impossible with current resources and "
            "technology. We simply cannot produce this much... yet.",
            controls=_point(85, 85),
        ),
        TourStep(
            "Opportunity Cost",
            "Moving along the curve shows trade-offs. To get more of one good, you must "
            "give up some of the other. Notice how the cost INCREASES as you specialize "
            "more (the curve bows outward).",
            controls=_point(30, 95, on_curve=True),
        ),
        TourStep(
            "Economic Growth",
            "When the economy grows (more resources, better technology), the entire "
            "curve shifts outward. Previously unattainable points become possible!",
            controls={"shift_factor": 0.5},
        ),
        TourStep(
            "Try It Yourself!",
            "Click anywhere on the graph to move your production point. Use the slider "
            "to simulate economic growth or recession. Watch how opportunity cost "
            "changes as you move along the curve.",
            controls=dict(_point(60, 60), shift_factor=0.0),
        ),
    ],
)

SUPPLY_DEMAND = Tour(
    slug="supply-demand",
    title="Supply & Demand",
    department=Department.ECONOMICS,
    controls={
        "control_type": "none",
        "control_price": 40,
        "tax_amount": 15,
        "subsidy_amount": 15,
        "demand_shift": 0,
        "supply_shift": 0,
        "demand_slope": -0.8,
        "supply_slope": 0.7,
        "shift_reason": "",
    },
    steps=[
        TourStep(
            "The Law of Demand",
            "Holding all else constant (ceteris paribus), as price FALLS, quantity "
            "demanded RISES. This creates the downward-sloping demand curve.",
            controls={
                "control_type": "none",
                "demand_shift": 0,
                "supply_shift": 0,
                "shift_reason": "",
            },
        ),
        TourStep(
            "The Law of Supply",
            "Holding all else constant, as price RISES, quantity supplied RISES. "
            "Producers are willing to make more at higher prices. This creates the "
            "upward-sloping supply curve.",
            controls={"control_type": "none"},
        ),
        TourStep(
            "Market Equilibrium",
            "Where supply meets demand is equilibrium. At this price, Qs = Qd. The "
            'market "clears" -- no shortage, no surplus. This is the efficient outcome.',
            controls={"control_type": "none"},
        ),
        TourStep(
            "Consumer & Producer Surplus",
            "Consumer surplus (green) = value to buyers above what they paid. Producer "
            "surplus (blue) = revenue above minimum acceptable. Together = total welfare "
            "gains from trade.",
            controls={"control_type": "none"},
        ),
        TourStep(
            "Change in Quantity vs Change in Demand",
            "MOVEMENT ALONG curve = change in Qs or Qd (caused by price change). SHIFT of "
            "entire curve = change in S or D (caused by non-price determinants like "
            "income, preferences).",
            highlight="Higher wages -> more restaurant meals",
            controls={
                "demand_shift": 20,
                "supply_shift": 0,
                "shift_reason": "Income (normal good)",
            },
        ),
        TourStep(
            "Price Ceiling (Maximum Price)",
            "Government sets MAXIMUM price below equilibrium. Creates SHORTAGE -- "
            "Qd > Qs. Examples: rent control, gas price caps during crisis. Creates "
            "deadweight loss.",
            controls={"control_type": "ceiling", "control_price": 35, "shift_reason": ""},
        ),
        TourStep(
            "Price Floor (Minimum Price)",
            "Government sets MINIMUM price above equilibrium. Creates SURPLUS -- "
            "Qs > Qd. Examples: minimum wage, agricultural price supports. Creates "
            "deadweight loss.",
            controls={"control_type": "floor", "control_price": 60},
        ),
        TourStep(
            "Per-Unit Tax",
            'Tax creates a "wedge" between buyer price and seller price. Tax burden '
            "(incidence) depends on elasticity -- the MORE INELASTIC side bears MORE "
            "tax. Creates deadweight loss.",
            controls={"control_type": "tax", "tax_amount": 20},
        ),
        TourStep(
            "Subsidy",
            "A subsidy is the opposite of a tax -- government pays part of the cost. It "
            "increases quantity traded but can create inefficiency if market wasn't "
            "failing.",
            controls={"control_type": "subsidy", "subsidy_amount": 15},
        ),
        TourStep(
            "Elasticity & Tax Incidence",
            "Elastic demand = buyers sensitive to price (horizontal). Inelastic = less "
            "sensitive (vertical). Try adjusting slopes to see how tax burden shifts!",
            controls={"control_type": "tax", "tax_amount": 15, "demand_slope": -0.4},
        ),
    ],
)


def _fed(policy: str, md_shift: int = 0) -> Dict:
    return {"fed_policy": policy, "md_shift": md_shift, "ms_base": 100}


MONEY_MARKET = Tour(
    slug="money-market",
    title="The Money Market",
    department=Department.ECONOMICS,
    controls={
        "ms_base": 100,
        "md_shift": 0,
        "fed_policy": "none",
        "show_transmission": True,
    },
    steps=[
        TourStep(
            "The Money Market",
            "The money market determines the nominal interest rate. The Fed controls "
            "money supply (Ms). Money demand (Md) comes from households and firms "
            "wanting liquidity. The intersection sets the equilibrium interest rate.",
            controls=dict(_fed("none"), show_transmission=True),
        ),
        TourStep(
            "Money Supply (Ms)",
            "The Fed sets the money supply, making it a VERTICAL line. The quantity does "
            "not depend on the interest rate -- it is determined by Fed policy (OMO, "
            "discount rate, reserve requirements).",
            highlight="Ms is vertical because the Fed controls it directly",
            controls={"fed_policy": "none", "md_shift": 0},
        ),
        TourStep(
            "Money Demand (Md)",
            "Money demand slopes DOWN: at higher interest rates, the opportunity cost of "
            "holding money rises, so people hold less cash and more bonds. Shifts from "
            "GDP growth, price level changes.",
            controls={"fed_policy": "none", "md_shift": 0},
        ),
        TourStep(
            "Equilibrium Interest Rate",
            "Where Ms = Md determines the nominal interest rate. If i is above "
            "equilibrium, people hold less money than available (surplus) -- they buy "
            "bonds, pushing i down. Vice versa if i is below.",
            highlight="The market self-corrects to equilibrium",
            controls=_fed("none"),
        ),
        TourStep(
            "Open Market Operations: Buy",
            "The Fed's MOST COMMON tool. Buying bonds injects money into banks, shifting "
            "Ms RIGHT. The interest rate FALLS. This is EXPANSIONARY monetary policy.",
            highlight="Watch Ms shift right and i fall",
            controls=_fed("omo_buy"),
        ),
        TourStep(
            "Open Market Operations: Sell",
            "Selling bonds drains money from banks, shifting Ms LEFT. The interest rate "
            "RISES. This is CONTRACTIONARY monetary policy used to fight inflation.",
            controls=_fed("omo_sell"),
        ),
        TourStep(
            "Discount Rate Policy",
            "The discount rate is what the Fed charges banks for loans. Lowering it "
            "makes borrowing cheaper, expanding reserves and money supply. Raising it "
            "does the opposite.",
            controls=_fed("discount_low"),
        ),
        TourStep(
            "Reserve Requirements",
            "The reserve ratio determines how much banks must hold vs. lend. Lowering it "
            "increases the money multiplier, expanding Ms. This tool is rarely used but "
            "powerful.",
            controls=_fed("rrr_low"),
        ),
        TourStep(
            "Money Demand Shifts",
            "Md shifts RIGHT from: higher GDP (more transactions), higher price level, "
            "increased uncertainty. When Md shifts right with fixed Ms, the interest "
            "rate RISES.",
            highlight="GDP growth shifts Md right, raising i",
            controls=_fed("none", md_shift=3),
        ),
        TourStep(
            "Explore!",
            "Combine Fed policies with money demand shifts. See how different tools "
            "affect the interest rate. The transmission mechanism: "
            "Ms -> i -> I -> AD -> GDP.",
            controls=_fed("none"),
        ),
    ],
)

PENDULUM = Tour(
    slug="pendulum",
    title="Simple Pendulum",
    department=Department.PHYSICS,
    controls={
        "mode": "simple",
        "length": 200,
        "gravity": 9.8,
        "damping": 0.999,
        "initial_angle": 45,
        "show_trail": True,
        "show_energy": True,
        "show_graph": True,
        "large_angle": True,
    },
    steps=[
        TourStep(
            "Pendulum Motion",
            "A pendulum swings back and forth under gravity. For small angles, it "
            "approximates simple harmonic motion.",
            controls={
                "mode": "simple",
                "initial_angle": 15,
                "large_angle": False,
                "show_energy": True,
            },
        ),
        TourStep(
            "Small Angle Approx.",
            "For small angles (< 15deg), sin(theta) ~ theta. Period T = 2pi*sqrt(L/g), "
            'independent of amplitude. This is the "small angle approximation".',
            controls={"initial_angle": 10, "large_angle": False},
        ),
        TourStep(
            "Large Angle Effects",
            "Beyond ~15deg, the small angle approximation breaks down. The true period "
            "increases with amplitude. Toggle large-angle mode to see the correction.",
            highlight='Enable "Large Angle" toggle.',
            controls={"initial_angle": 60, "large_angle": True},
        ),
        TourStep(
            "Energy Conservation",
            "At the top: max PE, zero KE. At the bottom: max KE, zero PE. Total energy "
            "is conserved (minus damping losses).",
            controls={"show_energy": True, "initial_angle": 45, "damping": 1.0},
        ),
        TourStep(
            "Damping",
            "Real pendulums lose energy to friction/air resistance. The amplitude "
            "decays exponentially. Lower damping = faster energy loss.",
            controls={"damping": 0.995, "initial_angle": 45},
        ),
        TourStep(
            "Period vs Length",
            "Period scales as sqrt(L). Quadrupling the length doubles the period. The "
            "graph shows this relationship.",
            highlight="Try changing the length slider.",
            controls={"show_graph": True, "damping": 1.0},
        ),
        TourStep(
            "Physical Pendulum",
            "A uniform rod pivoted at one end has T = 2pi*sqrt(2L/3g). The moment of "
            "inertia shifts the effective length to 2L/3.",
            controls={"mode": "physical", "initial_angle": 30},
        ),
    ],
)

BUILTIN_TOURS: List[Tour] = [
    UNIT_CIRCLE,
    DERIVATIVE,
    RIEMANN,
    LIMITS,
    CELL_DIVISION,
    SORTING,
    TITRATION,
    AD_AS,
    PPC,
    SUPPLY_DEMAND,
    MONEY_MARKET,
    PENDULUM,
]


def available_tours(
    tour_dirs: Iterable[Path] = (),
    on_error: Optional[Callable[[Path, TourFormatError], None]] = None,
) -> List[Tour]:
    """Built-in tours followed by tours found in ``tour_dirs``.

    A tour file whose slug matches a built-in tour replaces it in place.
    """
    tours: Dict[str, Tour] = {tour.slug: tour for tour in BUILTIN_TOURS}
    for tour in discover_tours(tour_dirs, on_error=on_error):
        tours[tour.slug] = tour
    return list(tours.values())


def select_tour(tours: List[Tour], selector: str) -> Tour:
    """Resolve a slug, or a path to a tour file, to a tour."""
    path = Path(selector).expanduser()
    if selector.lower().endswith(".json") or path.is_file():
        return load_tour(path)

    needle = selector.strip().lower()
    for tour in tours:
        if needle == tour.slug.lower():
            return tour

    raise ValueError("Tour not found. Use 'apwalk list' to see options.")
