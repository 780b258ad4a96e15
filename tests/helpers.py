from orgreact.models import ReactionSeed


def make_seed(name, formula, functional_group="Alkene", category="Hydrogenation",
              chapter=1, reaction_number=1, mechanism="Addition"):
    return ReactionSeed(
        name=name,
        category=category,
        functional_group=functional_group,
        chapter=chapter,
        reaction_number=reaction_number,
        reagents="reagents",
        conditions="conditions",
        mechanism=mechanism,
        products="products",
        real_world_applications="applications",
        molecular_formula=formula,
    )


def sample_seeds():
    return [
        make_seed("Hydrogenation of Alkene", "C2H4 + H2 -> C2H6"),
        make_seed(
            "Nitration of Benzene",
            "C6H6 + HNO3 -> C6H5NO2 + H2O",
            functional_group="Benzene",
            category="Nitration",
            chapter=3,
            mechanism="Electrophilic aromatic substitution",
        ),
        make_seed(
            "Hydrogenation of Alkyne",
            "C2H2 + H2 -> C2H4",
            functional_group="Alkyne",
            chapter=2,
        ),
    ]
