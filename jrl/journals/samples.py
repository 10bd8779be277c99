"""
Static demo journals shown to every viewer, with bundled translations.

Sample journals are read-only: they are never updated, deleted or
re-translated, and their owners never match a real viewer.
"""
from datetime import datetime, timedelta, timezone
from typing import List

from jrl.journals.schemas import Journal, JournalRef, Tier, Translation

_SAMPLES = [
    {
        "id": "sample-1",
        "title": "The Art of Mindful Living",
        "content": "Mindfulness is the practice of being fully present and engaged in the current moment. It involves paying attention to our thoughts, feelings, and surroundings without judgment. By cultivating mindfulness, we can reduce stress, improve focus, and enhance our overall well-being. Start with just five minutes of meditation each day, focusing on your breath and letting go of distracting thoughts.",
        "tags": ["mindfulness", "wellness", "mental health"],
        "days_ago": 1,
        "user_id": "demo-user-1",
        "translations": {
            "en": {
                "title": "The Art of Mindful Living",
                "content": "Mindfulness is the practice of being fully present and engaged in the current moment. It involves paying attention to our thoughts, feelings, and surroundings without judgment. By cultivating mindfulness, we can reduce stress, improve focus, and enhance our overall well-being. Start with just five minutes of meditation each day, focusing on your breath and letting go of distracting thoughts.",
                "tags": ["mindfulness", "wellness", "mental health"]
            },
            "es": {
                "title": "El Arte de Vivir Conscientemente",
                "content": "La atención plena es la práctica de estar completamente presente y comprometido con el momento actual. Involucra prestar atención a nuestros pensamientos, sentimientos y alrededores sin juzgar. Al cultivar la atención plena, podemos reducir el estrés, mejorar el enfoque y potenciar nuestro bienestar general. Comienza con solo cinco minutos de meditación cada día, enfocándote en tu respiración y dejando ir pensamientos distractivos.",
                "tags": ["atención plena", "bienestar", "salud mental"]
            },
            "fr": {
                "title": "L'Art de Vivre en Pleine Conscience",
                "content": "La pleine conscience est la pratique d'être pleinement présent et engagé dans le moment actuel. Elle implique de prêter attention à nos pensées, sentiments et environnement sans jugement. En cultivant la pleine conscience, nous pouvons réduire le stress, améliorer la concentration et renforcer notre bien-être général. Commencez par seulement cinq minutes de méditation par jour, en vous concentrant sur votre respiration et en laissant aller les pensées distrayantes.",
                "tags": ["pleine conscience", "bien-être", "santé mentale"]
            },
            "de": {
                "title": "Die Kunst des Achtsamen Lebens",
                "content": "Achtsamkeit ist die Praxis, vollständig präsent und engagiert im aktuellen Moment zu sein. Sie beinhaltet die Aufmerksamkeit auf unsere Gedanken, Gefühle und Umgebung ohne Urteilsvermögen. Durch die Kultivierung von Achtsamkeit können wir Stress reduzieren, den Fokus verbessern und unser allgemeines Wohlbefinden stärken. Beginnen Sie mit nur fünf Minuten Meditation pro Tag, indem Sie sich auf Ihren Atem konzentrieren und ablenkende Gedanken loslassen.",
                "tags": ["achtsamkeit", "wohlbefinden", "geistige gesundheit"]
            },
            "zh": {
                "title": "正念生活的艺术",
                "content": "正念是完全存在并参与当前时刻的实践。它涉及注意我们的思想、感受和周围环境，而不进行判断。通过培养正念，我们可以减少压力，提高注意力，并增强整体健康。从每天五分钟的冥想开始，专注于呼吸，让分散注意力的想法离去。",
                "tags": ["正念", "健康", "心理健康"]
            },
            "ja": {
                "title": "マインドフルネス生活の芸術",
                "content": "マインドフルネスは現在の瞬間に完全に存在し、関与する実践です。それは私たちの思考、感情、周囲に判断なく注意を払うことを含みます。マインドフルネスを育てることで、私たちはストレスを減らし、集中力を改善し、全体的な健康を強化できます。毎日たった5分の瞑想から始め、呼吸に集中し、気が散る思考を放す。",
                "tags": ["マインドフルネス", "ウェルネス", "メンタルヘルス"]
            },
            "bn": {
                "title": "মাইন্ডফুল লিভিংয়ের শিল্প",
                "content": "মাইন্ডফুলনেস হলো বর্তমান মুহূর্তে সম্পূর্ণ উপস্থিত এবং জড়িত থাকার অনুশীলন। এটি বিচার ছাড়াই আমাদের চিন্তাভাবনা, অনুভূতি এবং পরিবেশের প্রতি মনোযোগ দেওয়া জড়িত। মাইন্ডফুলনেস চাষ করে, আমরা স্ট্রেস কমাতে পারি, ফোকাস উন্নত করতে পারি এবং আমাদের সামগ্রিক সুস্থতা বাড়াতে পারি। প্রতিদিন মাত্র পাঁচ মিনিটের মেডিটেশন দিয়ে শুরু করুন, আপনার শ্বাসে ফোকাস করে এবং বিভ্রান্তিকর চিন্তাভাবনা ছেড়ে দিন।",
                "tags": ["মাইন্ডফুলনেস", "সুস্থতা", "মানসিক স্বাস্থ্য"]
            },
            "hi": {
                "title": "माइंडफुल लिविंग की कला",
                "content": "माइंडफुलनेस वर्तमान क्षण में पूरी तरह से उपस्थित और व्यस्त रहने का अभ्यास है। इसमें हमारे विचारों, भावनाओं और आसपास के वातावरण पर बिना किसी निर्णय के ध्यान देना शामिल है। माइंडफुलनेस को विकसित करके, हम तनाव कम कर सकते हैं, फोकस में सुधार कर सकते हैं और अपनी समग्र भलाई बढ़ा सकते हैं। प्रतिदिन सिर्फ पांच मिनट की ध्यान से शुरुआत करें, अपनी सांस पर ध्यान केंद्रित करते हुए और विचलित करने वाली विचारों को जाने दें।",
                "tags": ["माइंडफुलनेस", "कल्याण", "मानसिक स्वास्थ्य"]
            },
            "pt": {
                "title": "A Arte de Viver com Consciência",
                "content": "A atenção plena é a prática de estar totalmente presente e engajado no momento atual. Envolve prestar atenção aos nossos pensamentos, sentimentos e arredores sem julgamento. Ao cultivar a atenção plena, podemos reduzir o estresse, melhorar o foco e aprimorar nosso bem-estar geral. Comece com apenas cinco minutos de meditação por dia, concentrando-se na sua respiração e deixando ir pensamentos distrativos.",
                "tags": ["atenção plena", "bem-estar", "saúde mental"]
            }
        }
    },
    {
        "id": "sample-2",
        "title": "Embracing Change in Life",
        "content": "Change is an inevitable part of life, yet many of us resist it. Learning to embrace change can lead to personal growth and new opportunities. Instead of fearing the unknown, we can view change as a chance to learn, adapt, and discover new aspects of ourselves. Remember that every ending is also a beginning.",
        "tags": ["change", "growth", "life lessons"],
        "days_ago": 2,
        "user_id": "demo-user-2",
        "translations": {
            "en": {
                "title": "Embracing Change in Life",
                "content": "Change is an inevitable part of life, yet many of us resist it. Learning to embrace change can lead to personal growth and new opportunities. Instead of fearing the unknown, we can view change as a chance to learn, adapt, and discover new aspects of ourselves. Remember that every ending is also a beginning.",
                "tags": ["change", "growth", "life lessons"]
            },
            "es": {
                "title": "Abrazando el Cambio en la Vida",
                "content": "El cambio es una parte inevitable de la vida, sin embargo muchos de nosotros lo resistimos. Aprender a abrazar el cambio puede llevar al crecimiento personal y nuevas oportunidades. En lugar de temer lo desconocido, podemos ver el cambio como una oportunidad para aprender, adaptarnos y descubrir nuevos aspectos de nosotros mismos. Recuerda que cada final también es un principio.",
                "tags": ["cambio", "crecimiento", "lecciones de vida"]
            },
            "fr": {
                "title": "Embrasser le Changement dans la Vie",
                "content": "Le changement est une partie inévitable de la vie, pourtant beaucoup d'entre nous lui résistons. Apprendre à embrasser le changement peut mener à la croissance personnelle et à de nouvelles opportunités. Au lieu de craindre l'inconnu, nous pouvons voir le changement comme une chance d'apprendre, de nous adapter et de découvrir de nouveaux aspects de nous-mêmes. Souvenez-vous que chaque fin est aussi un commencement.",
                "tags": ["changement", "croissance", "leçons de vie"]
            },
            "de": {
                "title": "Veränderung im Leben Annehmen",
                "content": "Veränderung ist ein unvermeidlicher Teil des Lebens, doch viele von uns widerstehen ihr. Das Lernen, Veränderung anzunehmen, kann zu persönlichem Wachstum und neuen Möglichkeiten führen. Anstatt das Unbekannte zu fürchten, können wir Veränderung als Chance sehen, zu lernen, uns anzupassen und neue Aspekte von uns selbst zu entdecken. Denken Sie daran, dass jedes Ende auch ein Anfang ist.",
                "tags": ["veränderung", "wachstum", "lebenslektionen"]
            },
            "zh": {
                "title": "拥抱生活中的改变",
                "content": "改变是生活中不可避免的一部分，但我们很多人却抵制它。学会拥抱改变可以带来个人成长和新机会。我们可以把改变视为学习、适应和发现自己新方面的机会，而不是害怕未知。记住，每一个结束也是一个开始。",
                "tags": ["改变", "成长", "生活教训"]
            },
            "ja": {
                "title": "人生における変化を受け入れる",
                "content": "変化は避けられず、しばしば不快ですが、それは成長の触媒でもあります。変化に抵抗するとき、私たちは不必要な苦しみを作り出します。代わりに、新しい経験と個人的な発展の機会としてそれを受け入れることを学ぶべきです。すべての終わりは新しい始まりであり、すべての挑戦はより強くなるチャンスです。",
                "tags": ["変化", "成長", "個人的な発展"]
            },
            "bn": {
                "title": "জীবনে পরিবর্তন গ্রহণ করা",
                "content": "পরিবর্তন জীবনের একটি অবশ্যম্ভাবী অংশ, তবুও আমাদের অনেকেই এটিকে প্রতিরোধ করে। পরিবর্তন গ্রহণ করতে শিখলে ব্যক্তিগত বৃদ্ধি এবং নতুন সুযোগ আসতে পারে। অজানাকে ভয় করার পরিবর্তে, আমরা পরিবর্তনকে শিখতে, খাপ খাইয়ে নিতে এবং নিজেদের নতুন দিক আবিষ্কার করার সুযোগ হিসেবে দেখতে পারি। মনে রাখবেন যে প্রতিটি শেষও একটি শুরু।",
                "tags": ["পরিবর্তন", "বৃদ্ধি", "জীবনের শিক্ষা"]
            },
            "hi": {
                "title": "जीवन में बदलाव को अपनाना",
                "content": "बदलाव जीवन का एक अपरिहार्य हिस्सा है, फिर भी हममें से कई लोग इसे रोकते हैं। बदलाव को अपनाना सीखना व्यक्तिगत विकास और नए अवसरों की ओर ले जा सकता है। अज्ञात से डरने के बजाय, हम बदलाव को सीखने, अनुकूलन करने और अपने नए पहलुओं की खोज करने का मौका देख सकते हैं। याद रखें कि हर अंत भी एक शुरुआत है।",
                "tags": ["बदलाव", "विकास", "जीवन की सीख"]
            },
            "pt": {
                "title": "Abraçando a Mudança na Vida",
                "content": "A mudança é uma parte inevitável da vida, no entanto muitos de nós a resistimos. Aprender a abraçar a mudança pode levar ao crescimento pessoal e novas oportunidades. Em vez de temer o desconhecido, podemos ver a mudança como uma chance de aprender, adaptar e descobrir novos aspectos de nós mesmos. Lembre-se de que todo fim também é um começo.",
                "tags": ["mudança", "crescimento", "lições de vida"]
            }
        }
    },
    {
        "id": "sample-3",
        "title": "The Power of Gratitude",
        "content": "Practicing gratitude can transform our perspective on life. When we focus on what we have rather than what we lack, we cultivate happiness and contentment. Start a daily gratitude journal where you write down three things you're thankful for each day. This simple practice can shift your mindset and improve your overall well-being.",
        "tags": ["gratitude", "happiness", "mindset"],
        "days_ago": 3,
        "user_id": "demo-user-3",
        "translations": {
            "en": {
                "title": "The Power of Gratitude",
                "content": "Practicing gratitude can transform our perspective on life. When we focus on what we have rather than what we lack, we cultivate happiness and contentment. Start a daily gratitude journal where you write down three things you're thankful for each day. This simple practice can shift your mindset and improve your overall well-being.",
                "tags": ["gratitude", "happiness", "mindset"]
            },
            "es": {
                "title": "El Poder de la Gratitud",
                "content": "Practicar la gratitud puede transformar nuestra perspectiva de la vida. Cuando nos enfocamos en lo que tenemos en lugar de lo que nos falta, cultivamos la felicidad y el contentamiento. Comienza un diario de gratitud diario donde escribas tres cosas por las que estás agradecido cada día. Esta práctica simple puede cambiar tu mentalidad y mejorar tu bienestar general.",
                "tags": ["gratitud", "felicidad", "mentalidad"]
            },
            "fr": {
                "title": "Le Pouvoir de la Gratitude",
                "content": "Pratiquer la gratitude peut transformer notre perspective sur la vie. Lorsque nous nous concentrons sur ce que nous avons plutôt que sur ce qui nous manque, nous cultivons le bonheur et la satisfaction. Tenir un journal de gratitude nous aide à remarquer les petites joies et bénédictions qui nous entourent quotidiennement. La gratitude change notre état d'esprit de pénurie à abondance.",
                "tags": ["gratitude", "bonheur", "état d'esprit"]
            },
            "de": {
                "title": "Die Kraft der Dankbarkeit",
                "content": "Die Praxis der Dankbarkeit kann unsere Perspektive auf das Leben verändern. Wenn wir uns auf das konzentrieren, was wir haben, anstatt auf das, was uns fehlt, kultivieren wir Glück und Zufriedenheit. Ein Dankbarkeitstagebuch zu führen hilft uns, die kleinen Freuden und Segnungen zu bemerken, die uns täglich umgeben. Dankbarkeit verschiebt unsere Denkweise von Mangel zu Fülle.",
                "tags": ["dankbarkeit", "glück", "denkweise"]
            },
            "zh": {
                "title": "感恩的力量",
                "content": "练习感恩可以改变我们对生活的看法。当我们专注于我们拥有的而不是我们缺少的，我们培养幸福和满足感。保持感恩日记帮助我们注意到每天围绕我们的小快乐和祝福。感恩将我们的心态从匮乏转向丰富。",
                "tags": ["感恩", "幸福", "心态"]
            },
            "ja": {
                "title": "感謝の力",
                "content": "感謝を実践することは、私たちの人生観を変えることができます。私たちが欠けているものではなく持っているものに焦点を当てる時、私たちは幸福と満足を育みます。感謝の日記をつけることは、私たちを毎日囲む小さな喜びと祝福に気づかせてくれます。感謝は私たちの心構えを欠乏から豊かさへとシフトさせます。",
                "tags": ["感謝", "幸福", "心構え"]
            },
            "bn": {
                "title": "কৃতজ্ঞতার শক্তি",
                "content": "কৃতজ্ঞতা অনুশীলন আমাদের জীবনের দৃষ্টিভঙ্গি পরিবর্তন করতে পারে। যখন আমরা আমাদের কাছে যা আছে তার উপর ফোকাস করি, তখন আমরা সুখ এবং সন্তুষ্টি লালন করি। প্রতিদিন তিনটি জিনিস লিখে একটি দৈনিক কৃতজ্ঞতা জার্নাল শুরু করুন যার জন্য আপনি কৃতজ্ঞ। এই সহজ অনুশীলন আপনার মানসিকতা পরিবর্তন করতে পারে এবং আপনার সামগ্রিক সুস্থতা উন্নত করতে পারে।",
                "tags": ["কৃতজ্ঞতা", "সুখ", "মানসিকতা"]
            },
            "hi": {
                "title": "कृतज्ञता की शक्ति",
                "content": "कृतज्ञता का अभ्यास हमारे जीवन की दृष्टि को बदल सकता है। जब हम उस पर ध्यान केंद्रित करते हैं जो हमारे पास है, बजाय उसकी जो हमारे पास नहीं है, तो हम खुशी और संतुष्टि को बढ़ावा देते हैं। एक दैनिक कृतज्ञता पत्रिका शुरू करें जहां आप प्रतिदिन तीन चीजें लिखें जिनके लिए आप आभारी हैं। यह सरल अभ्यास आपके मानसिकता को बदल सकता है और आपके समग्र कल्याण में सुधार कर सकता है।",
                "tags": ["कृतज्ञता", "खुशी", "मानसिकता"]
            },
            "pt": {
                "title": "O Poder da Gratidão",
                "content": "Praticar a gratidão pode transformar nossa perspectiva sobre a vida. Quando nos concentramos no que temos em vez do que nos falta, cultivamos a felicidade e a satisfação. Comece um diário diário de gratidão onde você escreve três coisas pelas quais você é grato todos os dias. Esta prática simples pode mudar sua mentalidade e melhorar seu bem-estar geral.",
                "tags": ["gratidão", "felicidade", "mentalidade"]
            }
        }
    }
]


def build_samples(now: datetime = None) -> List[Journal]:
    """Fresh copies of the sample set, newest first, dated relative to ``now``."""
    now = now or datetime.now(timezone.utc)
    samples = []
    for data in _SAMPLES:
        samples.append(
            Journal(
                ref=JournalRef(tier=Tier.SAMPLE, id=data["id"], origin=Tier.SAMPLE),
                user_id=data["user_id"],
                title=data["title"],
                content=data["content"],
                tags=list(data["tags"]),
                created_at=now - timedelta(days=data["days_ago"]),
                translations={
                    lang: Translation(**fields) for lang, fields in data["translations"].items()
                },
            )
        )
    return samples


SAMPLE_JOURNALS = tuple(build_samples())
